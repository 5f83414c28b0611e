from testbridge.configurators import NoopConfigurator, registry


class QuietConfigurator(NoopConfigurator):
    """Example strategy: pins every suite to a single thread."""

    def configure_suite(self, suite, options) -> None:
        suite.thread_count = 1


def register() -> None:
    registry.update_or_register("quiet", QuietConfigurator)
