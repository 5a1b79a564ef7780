from abc import ABC, abstractmethod


class RandomSourceUnavailableError(Exception):
    pass


class IRandomSource(ABC):
    @abstractmethod
    def read(self, num_bytes: int) -> bytes:
        """
        Return exactly ``num_bytes`` random bytes.

        Raises:
            RandomSourceUnavailableError: The underlying source cannot be used.
        """
        pass

    @property
    @abstractmethod
    def name(self):
        pass


class BaseRandomSource(IRandomSource):
    def __init__(self, name):
        super().__init__()
        self._name = name

    @property
    def name(self):
        return self._name

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"
