from dataclasses import dataclass

from viewmock import NotifyPropertyChanged, observe, observe_partial

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Defining a view model")
print("-" * 100)
print()


# Any object with subscribe(handler) can be observed. The base class provides one.
@dataclass
class ProfileViewModel(NotifyPropertyChanged):
    name: str = "Alice"
    age: int = 30

    def rename(self, value):
        self.name = value
        self.notify_property_changed("name")

    def birthday(self):
        # Forgot to notify!
        self.age += 1


profile = ProfileViewModel()
view = observe(profile)

print(f"Displayed name: {view.displayed_value('name')}")
print(f"Displayed age:  {view.displayed_value(lambda vm: vm.age)}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Notified and forgotten changes")
print("-" * 100)
print()

profile.rename("Bob")
print(f"After rename, view shows: {view.displayed_value('name')}")

profile.birthday()
print(f"After birthday, model holds {view.actual_value('age')}")
print(f"...but the view still shows {view.displayed_value('age')}")

# is_displayed_as pairs with last_error() for readable assertion messages.
if not view.is_displayed_as(lambda vm: vm.age, 31):
    print(f"Diagnosis: {view.last_error()}")

print(f"Stale fields: {view.stale_fields()}")

# An empty field name refreshes everything.
profile.notify_property_changed()
print(f"After refresh-all, stale fields: {view.stale_fields()}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Observing only some fields")
print("-" * 100)
print()

partial = observe_partial(ProfileViewModel()).with_field("name")
print(f"Observed fields: {partial.observed_fields}")

try:
    partial.displayed_value("age")
except LookupError as e:
    print(f"Error: {e}")
