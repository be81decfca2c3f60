

### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Repozytoria (adaptery):
#     * wykrywają duplikaty identyfikatorów i niepoprawne pole sortowania
#     * mapują błędy techniczne (np. IntegrityError) na DomainError
#
# - Serwisy:
#     * jeśli get() zwraca None, a operacja wymaga istniejącego zadania: TaskNotFoundError
#     * pilnują reguły przejść statusu: InvalidStatusError
#
# - UI (HTTP, CLI):
#     * waliduje dane wejściowe i rzuca TaskValidationError
#     * łapie DomainError (lub konkretne klasy) i zwraca ustrukturyzowaną odpowiedź
#     * wszystko inne traktuje jako błąd techniczny (loguje stacktrace, HTTP 500)


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych
    (np. problemów z bazą danych, I/O, siecią).
    Nie powinna być rzucana bezpośrednio: używaj klas pochodnych.
    """

class TaskAlreadyExistsError(DomainError):
    """Rzucany, gdy `insert()` trafia na istniejący `task_id`."""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Task already exists with id: {self.task_id}"

class TaskValidationError(DomainError):
    """Rzucany, gdy dane wejściowe nie spełniają ograniczeń pól.
    Przykłady:
    - tytuł jest pusty albo dłuższy niż 100 znaków,
    - nieznane pole sortowania.
    Zawiera nazwę pola (`field`) i komunikat (`message`); `str()` daje "pole: komunikat",
    co trafia bezpośrednio do odpowiedzi HTTP.
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"{self.field}: {self.message}"


class InvalidStatusError(DomainError):
    """Rzucany przez serwis przy niedozwolonym przejściu statusu (IN_PROGRESS -> DONE)."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
    def __str__(self):
        return self.message


class TaskNotFoundError(DomainError):
    """Rzucany, gdy żądane zadanie nie istnieje w repozytorium.
    Występuje w operacjach wymagających istnienia rekordu: get, update, delete.
    Zgłaszany przez serwis, jeśli `repo.get()` zwraca `None`.
    """
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Task not found with id: {self.task_id}"
