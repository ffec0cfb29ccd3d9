class ProbeError(Exception):
    """
    Base class for errors raised by the probing engine.
    """


class DurabilitySeedError(ProbeError):
    """
    Raised when an object of the durability bucket could not be written
    within the configured retry policy.
    """

    def __init__(self, bucket: str, key: str, attempts: int):
        self.bucket = bucket
        self.key = key
        self.attempts = attempts
        super().__init__(
            f"Could not write {key} to {bucket} after {attempts} attempts"
        )


class DurabilityLossError(ProbeError):
    """
    Raised when a seeded object comes back with a size other than the one
    it was written with.
    """

    def __init__(self, key: str, expected_size: int, actual_size: int):
        self.key = key
        self.expected_size = expected_size
        self.actual_size = actual_size
        super().__init__(
            f"Object {key} has {actual_size} bytes, expected {expected_size}"
        )
