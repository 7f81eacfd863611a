"""Exceptions raised while resolving and building IDE artifacts."""


class IdeaExtError(Exception):
    """Base class for all idea-ext errors."""


class UnresolvedModuleError(IdeaExtError):
    pass


class UnresolvedConfigurationError(IdeaExtError):
    pass


class ArtifactError(IdeaExtError):
    """Base class for artifact tree failures."""


class MissingSourceError(ArtifactError):
    """A file, directory or archive referenced by the tree does not exist."""


class UnknownArtifactError(ArtifactError):
    """An artifact name is not registered in the top-level collection."""


class ArtifactCycleError(ArtifactError):
    """Artifact references form a cycle."""


class ArtifactBuildError(ArtifactError):
    """The output directory or an archive could not be written."""


class SettingsError(IdeaExtError, ValueError):
    """A settings script declared an invalid name, notation or duplicate."""
