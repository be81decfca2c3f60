from enum import Enum

class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    def __str__(self):
        return self.value

    @classmethod
    def allowed_values(cls) -> str:
        """Lista dozwolonych wartości do komunikatów błędów, np. 'PENDING, IN_PROGRESS, DONE'."""
        return ", ".join(s.value for s in cls)
