class MandelartError(RuntimeError):
    """Base class for every fatal error raised by a render run."""


class ConfigError(MandelartError, ValueError):
    pass


class OutputError(MandelartError):
    """Writing a frame to the output sink failed."""


class WorkerError(MandelartError):
    """A frame task failed or its result never arrived."""


class StreamFormatError(MandelartError, ValueError):
    pass
