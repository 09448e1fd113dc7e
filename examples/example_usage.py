"""Example: drive the service layer directly (no Flask, no database).

Controllers are a thin layer; the check-in rules live in the services.
"""

from event_checkin.container import build_container
from event_checkin.core.enums import QrStorageKind, StoreBackend
from event_checkin.settings import AppSettings


def main():
    settings = AppSettings(
        secret_key="example",
        store_backend=StoreBackend.MEMORY,
        qr_storage=QrStorageKind.INLINE,
        base_url="http://localhost:3000",
    )
    container = build_container(settings)

    result = container.registration_service.register({"name": "Asha", "zoneDay1": "amw"})
    registrant = result.registrant
    print(result.scan_url, registrant.manual_code, registrant.zone_day2)

    outcome = container.checkin_service.scan_by_manual_code(registrant.manual_code, "gate")
    print(outcome.message, outcome.registrant.gate_status.value)


if __name__ == "__main__":
    main()
