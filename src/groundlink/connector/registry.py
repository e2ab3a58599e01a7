import threading


class ConnectionSlot:
    """ Holds the live conduit, or None. Only ever touched with the registry lock held. """

    def __init__(self):
        self.handle = None


class ConnectionRegistry:
    """
    The single place the live conduit is kept. There is at most one, and everything that reads or
    replaces it goes through with_lock(), so the lock serializes all access.

    Don't do blocking I/O inside with_lock() - the telemetry reader fetches the conduit and
    receives from it after the lock is released.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._slot = ConnectionSlot()

    def with_lock(self, fn):
        """
        Runs fn with exclusive access to the slot.
        :param fn: a callable taking the ConnectionSlot
        :return: the result of fn
        """
        with self._lock:
            return fn(self._slot)

    def current(self):
        """ the live conduit, or None """
        return self.with_lock(lambda slot: slot.handle)

    @property
    def connected(self) -> bool:
        return self.current() is not None

    def install(self, handle):
        """
        Places a conduit in the slot.
        :return: the conduit previously in the slot, which the caller now owns
        """
        def swap(slot):
            previous, slot.handle = slot.handle, handle
            return previous
        return self.with_lock(swap)

    def take(self):
        """ Empties the slot and returns what was there. The caller now owns the conduit. """
        return self.install(None)

    def close(self):
        """
        Empties the slot and closes the conduit that was there, under the lock.
        :return: the closed conduit, or None if the slot was empty
        """
        def clear(slot):
            handle, slot.handle = slot.handle, None
            if handle is not None:
                handle.close()
            return handle
        return self.with_lock(clear)
