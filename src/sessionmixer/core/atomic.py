"""Single-word cached values shared between the UI and event threads."""


class AtomicInt:
    """
    An integer cell read and written from different threads without a lock.

    Each store is a single reference rebind and each load a single attribute
    read, both atomic under the interpreter. Cells are independent: there is
    no ordering between two cells, only between successive stores to one.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        self._value = value

    def load(self) -> int:
        return self._value

    def store(self, value: int) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"AtomicInt({self._value})"
