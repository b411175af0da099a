"""
Tests for the observable state stores.

Stores are driven through a mocked client so local mirroring, selection,
error capture and stale-load handling can be checked in isolation.
"""

from unittest.mock import Mock

import pytest

from petmanager.client import PetManagerClient
from petmanager.exceptions import (
    HTTPStatusException,
    StatusTransitionException,
    TransportException,
)
from petmanager.schemas import (
    API_CONTEXT,
    Appointment,
    Pet,
    RecordsResponse,
    Tablet,
    TabletCreate,
    TabletUpdate,
    Vaccine,
    VaccineUpdate,
    Weight,
    WeightCreate,
)
from petmanager.status import VaccineStatus, WeightPeriod
from petmanager.stores import (
    AppointmentStore,
    CollectionStore,
    PetStore,
    RecordsStore,
    TabletStore,
    VaccineStore,
    WeightStore,
)
from petmanager.utils.config import ClientConfig


@pytest.fixture
def make_pet(pet_payload):
    def _make(pet_id, **overrides) -> Pet:
        return Pet.model_validate(pet_payload(pet_id, **overrides), context=API_CONTEXT)

    return _make


@pytest.fixture
def make_vaccine(vaccine_payload, days_from_now):
    def _make(vaccine_id, days=-10, up_to_date=None) -> Vaccine:
        administered = days_from_now(days).strftime("%Y-%m-%d")
        return Vaccine.model_validate(
            vaccine_payload(vaccine_id, administered, up_to_date), context=API_CONTEXT
        )

    return _make


@pytest.fixture
def api() -> Mock:
    """A mocked PetManagerClient."""
    client = Mock(spec=PetManagerClient)
    client.config = ClientConfig(user_id=7, timezone="UTC")
    return client


@pytest.fixture
def events():
    """Record the attribute names of store notifications."""
    recorded = []

    def callback(store, name):
        recorded.append(name)

    callback.recorded = recorded
    return callback


class TestObservableStore:
    """Test subscriptions and error capture shared by all stores."""

    def test_subscribers_are_notified(self, api, events, make_pet):
        api.fetch_pets.return_value = [make_pet(1)]
        store = PetStore(api)
        store.subscribe(events)

        store.load_pets()

        assert events.recorded == ["is_loading", "is_loading", "pets", "selected_pet"]

    def test_unsubscribe(self, api, events):
        api.fetch_pets.return_value = []
        store = PetStore(api)
        unsubscribe = store.subscribe(events)

        unsubscribe()
        unsubscribe()
        store.load_pets()

        assert events.recorded == []

    def test_failure_sets_error_message(self, api):
        api.fetch_pets.side_effect = TransportException("GET failed: refused")
        store = PetStore(api)

        assert store.load_pets() is False
        assert store.error_message == "GET failed: refused"
        assert store.pets == []
        assert store.is_loading is False

    def test_success_clears_error_message(self, api, make_pet):
        api.fetch_pets.side_effect = [
            HTTPStatusException(status_code=500, body="boom"),
            [make_pet(1)],
        ]
        store = PetStore(api)

        store.load_pets()
        assert "500" in store.error_message

        store.load_pets()
        assert store.error_message is None

    def test_clear_error(self, api):
        store = PetStore(api)
        store.error_message = "old"

        store.clear_error()

        assert store.error_message is None

    def test_unexpected_errors_propagate(self, api):
        api.fetch_pets.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            PetStore(api).load_pets()


class TestPetStore:
    """Test pet list and selection handling."""

    def test_load_pets_selects_first(self, api, make_pet):
        api.fetch_pets.return_value = [make_pet(1), make_pet(2)]
        store = PetStore(api)

        assert store.load_pets() is True

        api.fetch_pets.assert_called_once_with(7)
        assert [p.id for p in store.pets] == [1, 2]
        assert store.selected_pet.id == 1

    def test_load_pets_keeps_existing_selection(self, api, make_pet):
        api.fetch_pets.return_value = [make_pet(1), make_pet(2, name="Renamed")]
        store = PetStore(api)
        store.selected_pet = make_pet(2)

        store.load_pets()

        assert store.selected_pet.name == "Renamed"

    def test_reload_without_selected_pet_falls_back_to_first(self, api, make_pet):
        api.fetch_pets.side_effect = [
            [make_pet(1), make_pet(2)],
            [make_pet(1), make_pet(3)],
            [],
        ]
        store = PetStore(api)
        store.load_pets()
        store.select_pet(store.get(2))

        store.load_pets()

        assert [p.id for p in store.pets] == [1, 3]
        assert store.selected_pet.id == 1
        assert store.selected_pet in store.pets

        store.load_pets()

        assert store.selected_pet is None

    def test_load_pets_requires_user(self, api):
        api.config = ClientConfig()

        with pytest.raises(ValueError):
            PetStore(api).load_pets()

    def test_load_pet_adds_and_selects(self, api, make_pet):
        api.fetch_pet.return_value = make_pet(5)
        store = PetStore(api)
        store.pets = [make_pet(1)]

        pet = store.load_pet(5)

        assert [p.id for p in store.pets] == [1, 5]
        assert store.selected_pet is pet

    def test_add_pet_appends_and_selects(self, api, make_pet):
        api.create_pet.return_value = make_pet(3, name="Luna")
        store = PetStore(api)
        store.pets = [make_pet(1)]

        pet = store.add_pet("Luna", "Husky", 2, 20.0, "female")

        request = api.create_pet.call_args[0][0]
        assert request.breed == "Husky"
        assert api.create_pet.call_args[1] == {"user_id": 7}
        assert [p.id for p in store.pets] == [1, 3]
        assert store.selected_pet is pet

    def test_add_pet_failure_leaves_list(self, api, make_pet):
        api.create_pet.side_effect = HTTPStatusException(status_code=422, body="bad")
        store = PetStore(api)
        store.pets = [make_pet(1)]

        assert store.add_pet("Luna", "Husky", 2, 20.0, "female") is None
        assert [p.id for p in store.pets] == [1]
        assert store.error_message is not None

    def test_update_pet_replaces_and_keeps_image(self, api, make_pet):
        original = make_pet(1).model_copy(update={"image_name": "dog.fill"})
        api.update_pet.return_value = make_pet(1, weight=32.0)
        store = PetStore(api)
        store.pets = [original, make_pet(2)]
        store.selected_pet = original

        updated = store.update_pet(original, weight=32.0)

        assert api.update_pet.call_args[0][1].to_payload() == {"weight": 32.0}
        assert updated.weight == 32.0
        assert updated.image_name == "dog.fill"
        assert store.pets[0] is updated
        assert store.selected_pet is updated

    def test_set_image_name_is_local(self, api, make_pet):
        pet = make_pet(1)
        store = PetStore(api)
        store.pets = [pet]

        store.set_image_name(pet, "cat.fill")

        assert store.pets[0].image_name == "cat.fill"
        api.update_pet.assert_not_called()

    def test_delete_selected_pet_falls_back_to_first(self, api, make_pet):
        api.delete_pet.return_value = None
        pets = [make_pet(1), make_pet(2), make_pet(3)]
        store = PetStore(api)
        store.pets = list(pets)
        store.selected_pet = pets[0]

        assert store.delete_pet(pets[0]) is True

        api.delete_pet.assert_called_once_with(1)
        assert [p.id for p in store.pets] == [2, 3]
        assert store.selected_pet.id == 2

    def test_delete_unselected_pet_keeps_selection(self, api, make_pet):
        pets = [make_pet(1), make_pet(2), make_pet(3)]
        store = PetStore(api)
        store.pets = list(pets)
        store.selected_pet = pets[2]

        store.delete_pet(pets[1])

        assert [p.id for p in store.pets] == [1, 3]
        assert store.selected_pet.id == 3

    def test_delete_last_pet_clears_selection(self, api, make_pet):
        pet = make_pet(1)
        store = PetStore(api)
        store.pets = [pet]
        store.selected_pet = pet

        store.delete_pet(pet)

        assert store.pets == []
        assert store.selected_pet is None

    def test_delete_failure_keeps_pet(self, api, make_pet):
        api.delete_pet.side_effect = HTTPStatusException(status_code=404)
        pet = make_pet(1)
        store = PetStore(api)
        store.pets = [pet]
        store.selected_pet = pet

        assert store.delete_pet(pet) is False
        assert store.pets == [pet]
        assert store.selected_pet is pet


class TestCollectionStore:
    """Test local mirroring shared by the per-pet stores."""

    def test_load_replaces_items(self, api, tablet_payload):
        api.fetch_tablets.return_value = [
            Tablet.model_validate(tablet_payload(1), context=API_CONTEXT)
        ]
        store = TabletStore(api, pet_id=4)
        store.items = ["stale"]

        assert store.load() is True

        api.fetch_tablets.assert_called_once_with(4)
        assert [t.id for t in store.tablets] == [1]

    def test_load_requires_pet(self, api):
        with pytest.raises(ValueError, match="no pet selected"):
            TabletStore(api).load()

    def test_client_hooks_are_abstract(self, api):
        with pytest.raises(TypeError):
            CollectionStore(api, pet_id=1)

    def test_add_appends_without_refetch(self, api, tablet_payload):
        existing = Tablet.model_validate(tablet_payload(1), context=API_CONTEXT)
        created = Tablet.model_validate(tablet_payload(2), context=API_CONTEXT)
        api.create_tablet.return_value = created
        store = TabletStore(api, pet_id=4)
        store.items = [existing]
        request = TabletCreate(name="Carprofen", start_date="2026-01-01")

        store.add(request)

        api.create_tablet.assert_called_once_with(4, request)
        api.fetch_tablets.assert_not_called()
        assert store.items == [existing, created]

    def test_update_replaces_by_id(self, api, tablet_payload):
        first = Tablet.model_validate(tablet_payload(1), context=API_CONTEXT)
        second = Tablet.model_validate(tablet_payload(2), context=API_CONTEXT)
        changed = Tablet.model_validate(
            tablet_payload(2, end_date="2026-01-10"), context=API_CONTEXT
        )
        api.update_tablet.return_value = changed
        store = TabletStore(api, pet_id=1)
        store.items = [first, second]

        store.update(2, TabletUpdate(end_date="2026-01-10"))

        assert store.items == [first, changed]

    def test_delete_removes_by_id(self, api, tablet_payload):
        api.delete_tablet.return_value = None
        store = TabletStore(api, pet_id=1)
        store.items = [
            Tablet.model_validate(tablet_payload(i), context=API_CONTEXT)
            for i in (1, 2, 3)
        ]

        assert store.delete(2) is True
        assert [t.id for t in store.items] == [1, 3]

    def test_failed_update_leaves_items(self, api, tablet_payload):
        original = Tablet.model_validate(tablet_payload(1), context=API_CONTEXT)
        api.update_tablet.side_effect = TransportException("down")
        store = TabletStore(api, pet_id=1)
        store.items = [original]

        assert store.update(1, TabletUpdate(notes="x")) is None
        assert store.items == [original]
        assert store.error_message == "down"

    def test_stale_load_is_discarded(self, api, tablet_payload):
        store = TabletStore(api, pet_id=1)
        old = [Tablet.model_validate(tablet_payload(1), context=API_CONTEXT)]
        new = [Tablet.model_validate(tablet_payload(2), context=API_CONTEXT)]

        def fetch_old(pet_id):
            # a newer load starts and completes while this one is in flight
            api.fetch_tablets.side_effect = lambda _: new
            store.load(2)
            return old

        api.fetch_tablets.side_effect = fetch_old

        assert store.load(1) is False
        assert store.items == new
        assert store.pet_id == 2
        assert store.is_loading is False

    def test_snapshot(self, api):
        store = WeightStore(api, pet_id=3)

        assert store.snapshot() == {
            "pet_id": 3,
            "count": 0,
            "is_loading": False,
            "error_message": None,
        }


class TestAppointmentStore:
    """Test appointment views."""

    def test_upcoming_and_past(self, api, appointment_payload, fixed_now):
        api.fetch_appointments.return_value = [
            Appointment.model_validate(appointment_payload(1, "2026-01-10T09:00:00"), context=API_CONTEXT),
            Appointment.model_validate(appointment_payload(2, "2026-01-30T09:00:00"), context=API_CONTEXT),
            Appointment.model_validate(appointment_payload(3, "2026-01-16T09:00:00"), context=API_CONTEXT),
        ]
        store = AppointmentStore(api, pet_id=1)
        store.load()

        assert [a.id for a in store.upcoming(fixed_now)] == [3, 2]
        assert [a.id for a in store.past(fixed_now)] == [1]
        assert store.timezone == "UTC"
        assert store.appointments is store.items

    def test_views_follow_store_timezone(self, api, appointment_payload, fixed_now):
        # now is 01:00 on the 16th in Auckland
        earlier = Appointment.model_validate(
            appointment_payload(1, "2026-01-15T09:00:00"), context=API_CONTEXT
        )
        later = Appointment.model_validate(
            appointment_payload(2, "2026-01-16T10:00:00"), context=API_CONTEXT
        )
        store = AppointmentStore(api, pet_id=1, timezone="Pacific/Auckland")
        store.items = [earlier, later]

        assert store.upcoming(fixed_now) == [later]
        assert store.past(fixed_now) == [earlier]
        assert store.label(earlier, fixed_now) == "Previous"
        assert store.days_until(earlier, fixed_now) is None
        assert store.label(later, fixed_now) == "Today"
        assert store.is_today(later, fixed_now)
        assert store.days_until(later, fixed_now) == 0

        utc_store = AppointmentStore(api, pet_id=1, timezone="UTC")
        assert utc_store.label(earlier, fixed_now) == "Today"
        assert utc_store.label(later, fixed_now) == "Scheduled"


class TestVaccineStore:
    """Test vaccine confirmation actions."""

    def test_confirm_moves_vaccine_to_last(self, api, make_vaccine, fixed_now):
        target = make_vaccine(1, days=-10)
        others = [
            make_vaccine(2, days=-3, up_to_date=False),
            make_vaccine(3, days=15),
            make_vaccine(4, days=-60, up_to_date=True),
        ]
        api.update_vaccine.return_value = make_vaccine(1, days=-10, up_to_date=True)
        store = VaccineStore(api, pet_id=1)
        store.items = [target, *others]

        assert [v.id for v in store.sorted_vaccines(fixed_now)][0] == 1
        assert store.up_to_date_count == 1

        updated = store.confirm(target, fixed_now)

        vaccine_id, request = api.update_vaccine.call_args[0]
        assert vaccine_id == 1
        assert request.to_payload() == {"up_to_date": True}
        assert updated.up_to_date is True
        assert [v.id for v in store.sorted_vaccines(fixed_now)].index(1) == 3
        assert store.up_to_date_count == 2

    def test_mark_missed(self, api, make_vaccine, fixed_now):
        vaccine = make_vaccine(1, days=-10)
        api.update_vaccine.return_value = make_vaccine(1, days=-10, up_to_date=False)
        store = VaccineStore(api, pet_id=1)
        store.items = [vaccine]

        store.mark_missed(vaccine, fixed_now)

        assert api.update_vaccine.call_args[0][1] == VaccineUpdate(up_to_date=False)
        assert store.by_status(fixed_now)[VaccineStatus.MISSED][0].id == 1

    def test_scheduled_vaccine_cannot_be_confirmed(self, api, make_vaccine, fixed_now):
        vaccine = make_vaccine(1, days=5)
        store = VaccineStore(api, pet_id=1)
        store.items = [vaccine]

        with pytest.raises(StatusTransitionException):
            store.confirm(vaccine, fixed_now)

        api.update_vaccine.assert_not_called()


class TestTabletAndWeightStores:
    """Test derived views of the tablet and weight stores."""

    def test_active_and_ended(self, api, tablet_payload, fixed_now):
        store = TabletStore(api, pet_id=1)
        store.items = [
            Tablet.model_validate(tablet_payload(1, "2025-01-01", "2025-02-01"), context=API_CONTEXT),
            Tablet.model_validate(tablet_payload(2, "2026-01-01"), context=API_CONTEXT),
        ]

        assert [t.id for t in store.active(fixed_now)] == [2]
        assert [t.id for t in store.ended(fixed_now)] == [1]

    def test_weight_trend(self, api, weight_payload, fixed_now):
        api.create_weight.return_value = Weight.model_validate(
            weight_payload(2, 31.0, "2026-01-14T08:00:00"), context=API_CONTEXT
        )
        store = WeightStore(api, pet_id=1)
        store.items = [
            Weight.model_validate(weight_payload(1, 30.0, "2026-01-10T08:00:00"), context=API_CONTEXT)
        ]

        store.add(WeightCreate(weight=31.0))
        trend = store.trend(WeightPeriod.WEEK, fixed_now)

        assert trend.change == pytest.approx(1.0)
        assert trend.is_gaining
        assert store.weights is store.items


class TestRecordsStore:
    """Test the aggregated records store."""

    def test_load_for_user(self, api, vaccine_payload):
        records = RecordsResponse.model_validate(
            {"vaccines": [vaccine_payload(1, pet_name="Buddy")]}, context=API_CONTEXT
        )
        api.fetch_user_records.return_value = records
        store = RecordsStore(api)

        assert store.load_for_user(7) is True

        api.fetch_user_records.assert_called_once_with(7)
        assert store.records is records

    def test_load_for_pet_failure_keeps_previous(self, api):
        api.fetch_pet_records.side_effect = HTTPStatusException(status_code=500)
        store = RecordsStore(api)

        assert store.load_for_pet(1) is False
        assert store.records.is_empty
        assert store.error_message == "Server responded with status 500"
