"""Extended reporter whose own dependency is not installed."""
import not_a_real_dependency_xyz  # noqa: F401


class Reporter:
    def __init__(self, listener, run_name) -> None:
        pass
