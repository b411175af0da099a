#!/usr/bin/env python3
"""
Basic usage examples for the petmanager client.

Demonstrates loading an owner's pets, reviewing a pet's vaccines,
appointments, medications and weight trend, confirming a vaccine, and
handling API errors.
"""

from petmanager import ClientConfig, PetManagerClient, PetManagerException
from petmanager.exceptions import StatusTransitionException, create_error_response
from petmanager.schemas import WeightCreate
from petmanager.status import VaccineStatus, WeightPeriod
from petmanager.stores import (
    AppointmentStore,
    PetStore,
    RecordsStore,
    TabletStore,
    VaccineStore,
    WeightStore,
)
from petmanager.utils import LoggingConfigurator


def print_change(store, name):
    print(f"  [{store.__class__.__name__}] {name} changed")


def pets_example(client: PetManagerClient) -> PetStore:
    """Example: loading and selecting pets."""
    print("\n=== Pets Example ===")

    pets = PetStore(client)
    pets.subscribe(print_change)

    if not pets.load_pets():
        print(f"❌ Could not load pets: {pets.error_message}")
        return pets

    for pet in pets.pets:
        print(f"• {pet.name} ({pet.breed}), {pet.age}y, {pet.weight}kg")
    if pets.selected_pet:
        print(f"✅ Selected {pets.selected_pet.name}")
    return pets


def vaccines_example(client: PetManagerClient, pet_id: int) -> None:
    """Example: vaccine statuses and confirmation."""
    print("\n=== Vaccines Example ===")

    vaccines = VaccineStore(client, pet_id=pet_id)
    if not vaccines.load():
        print(f"❌ {vaccines.error_message}")
        return

    for vaccine in vaccines.sorted_vaccines():
        print(f"• {vaccine.name}: {vaccine.status.label}")
    print(f"Up to date: {vaccines.up_to_date_count}/{len(vaccines.vaccines)}")

    pending = vaccines.by_status()[VaccineStatus.NEEDS_CONFIRMATION]
    if pending:
        try:
            confirmed = vaccines.confirm(pending[0])
            if confirmed:
                print(f"✅ Confirmed {confirmed.name}")
        except StatusTransitionException as e:
            print(f"⚠️  {e.message}")


def appointments_example(client: PetManagerClient, pet_id: int) -> None:
    """Example: upcoming and past appointments."""
    print("\n=== Appointments Example ===")

    appointments = AppointmentStore(client, pet_id=pet_id)
    if not appointments.load():
        print(f"❌ {appointments.error_message}")
        return

    for appointment in appointments.upcoming():
        print(
            f"• [{appointments.label(appointment)}] {appointment.reason} "
            f"in {appointments.days_until(appointment)} day(s)"
        )
    for appointment in appointments.past():
        print(f"• [{appointments.label(appointment)}] {appointment.reason}")


def medications_and_weight_example(client: PetManagerClient, pet_id: int) -> None:
    """Example: active medications and weight trend."""
    print("\n=== Medications and Weight Example ===")

    tablets = TabletStore(client, pet_id=pet_id)
    if tablets.load():
        print(f"Active: {[t.name for t in tablets.active()]}")
        print(f"Ended: {[t.name for t in tablets.ended()]}")

    weights = WeightStore(client, pet_id=pet_id)
    if weights.load():
        weights.add(WeightCreate(weight=12.4, notes="Morning weigh-in"))
        for period in WeightPeriod:
            trend = weights.trend(period)
            print(f"{period.value}: {trend.count} readings, change {trend.change:+.1f}kg")


def records_example(client: PetManagerClient, user_id: int) -> None:
    """Example: aggregated records for every pet."""
    print("\n=== Records Example ===")

    records = RecordsStore(client)
    if records.load_for_user(user_id):
        print(f"Pets with records: {', '.join(records.records.pet_names())}")


def error_handling_example(client: PetManagerClient) -> None:
    """Example: typed API errors."""
    print("\n=== Error Handling Example ===")

    try:
        client.fetch_pet(999999)
    except PetManagerException as e:
        print(f"❌ {type(e).__name__}: {e.message}")
        print(create_error_response(e))


def main() -> None:
    config = ClientConfig.from_environment()
    LoggingConfigurator.configure_from_client_config(config)
    if config.user_id is None:
        print("❌ PETMANAGER_USER_ID is not set")
        return

    with PetManagerClient(config) as client:
        pets = pets_example(client)
        if pets.selected_pet:
            pet_id = pets.selected_pet.id
            vaccines_example(client, pet_id)
            appointments_example(client, pet_id)
            medications_and_weight_example(client, pet_id)
        records_example(client, config.user_id)
        error_handling_example(client)


if __name__ == "__main__":
    print("Starting petmanager basic usage examples...")
    print("Set PETMANAGER_BASE_URL and PETMANAGER_USER_ID to point at your server")
    main()
