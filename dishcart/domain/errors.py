"""
Wyjatki domenowe.

Kazdy wyjatek niesie ``operation`` (np. ``cart.add_dish``, ``checkout.authorize``),
ustawiane przez komponent ktory go przepuszcza dalej. Dzieki temu transport
odroznia bledy koszyka od bledow checkoutu. Mapowanie na kody HTTP jest
w dishcart/api/errors.py.
"""


class DishcartError(Exception):
    """Bazowy wyjatek serwisu."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


class StoreUnavailable(DishcartError):
    """Odczyt/zapis w store nie powiodl sie (baza albo redis niedostepne)."""


class CartLockTimeout(StoreUnavailable):
    """Nie udalo sie uzyskac locka koszyka w zadanym czasie."""


class EntityConflict(DishcartError):
    """Naruszenie unikalnosci, np. drugi koszyk dla tego samego usera."""


class InvalidReference(DishcartError):
    """Referencja (user, danie, restauracja) nie istnieje w store."""


class NotFound(DishcartError):
    pass


class NotAuthenticated(DishcartError):
    def __init__(self, message: str = "Authentication required", operation: str | None = None):
        super().__init__(message, operation)


class CheckoutError(DishcartError):
    """Bazowy wyjatek autoryzacji platnosci."""


class GatewayUnavailable(CheckoutError):
    """Bramka platnosci nieosiagalna (siec, timeout, 5xx)."""


class GatewayRejected(CheckoutError):
    """Bramka odrzucila autoryzacje (4xx, odmowa)."""

    def __init__(self, message: str, status_code: int | None = None, operation: str | None = None):
        super().__init__(message, operation)
        self.status_code = status_code
