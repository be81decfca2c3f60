from taskboard.ports.auditor import Auditor

class StaticAuditor(Auditor):
    """Zawsze zwraca tę samą nazwę (z konfiguracji, domyślnie "system")."""

    def __init__(self, name: str = "system") -> None:
        self.name = name

    def current_auditor(self) -> str:
        return self.name
