"""IDE project settings and artifact builder."""

from .artifact_builder import DEFAULT_DESTINATION, ArtifactBuilder, create_artifact
from .artifact_serializer import artifact_to_map, artifacts_to_map
from .cli import main
from .ide_artifacts import ArtifactContainer, ArtifactType, TopLevelArtifact
from .project_models import DependencyConfiguration, ProjectModel, ResolvedLibrary, SourceModule
from .project_settings import ProjectSettings

__all__ = [
    "DEFAULT_DESTINATION", "ArtifactBuilder", "create_artifact",
    "artifact_to_map", "artifacts_to_map", "main",
    "ArtifactContainer", "ArtifactType", "TopLevelArtifact",
    "DependencyConfiguration", "ProjectModel", "ResolvedLibrary", "SourceModule",
    "ProjectSettings",
]
