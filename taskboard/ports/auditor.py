from typing import Protocol

class Auditor(Protocol):
    """Źródło nazwy użytkownika zapisywanej w `created_by` / `modified_by`."""
    def current_auditor(self) -> str:
        pass
