class WAXError(Exception):
    pass


class InvalidArgumentError(WAXError, ValueError):
    pass


class InvalidStateError(WAXError, RuntimeError):
    pass


class SinkError(WAXError, OSError):
    pass
