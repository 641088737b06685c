"""Exception hierarchy for the CV chat service."""


class CVChatError(Exception):
    """Base class for all service errors."""


class StartupError(CVChatError):
    """Corpus or index could not be prepared; the server must not start."""


class DatasetError(StartupError):
    """The CV dataset is missing, unreadable or malformed."""


class IndexBuildError(StartupError):
    """Embedding the corpus or populating the similarity index failed."""


class CompletionError(CVChatError):
    """The chat-completion provider failed or returned an unusable response."""
