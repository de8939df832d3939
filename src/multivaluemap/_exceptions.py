class InvalidArgumentError(TypeError):
    """Error raised when a :class:`MultiValuedMap` receives a badly shaped argument.

    Raised for seeds that are not iterable, seed elements that are not
    ``(key, value)`` entries, and :meth:`MultiValuedMap.set_all` arguments that are
    not iterable.
    """

    def __init__(self, value: object, *, expected: str) -> None:
        self.value = value
        self._expected = expected
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.value!r} is not {self._expected}"

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(value={self.value!r}, expected={self._expected!r})"
