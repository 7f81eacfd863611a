"""Artifact tree to IDE document mapping.

Turns artifact nodes into plain dicts with a ``type`` tag plus kind-specific
fields. Key order and list order follow declaration order, so repeated calls
on an unchanged tree produce identical output. Nothing is materialized here;
only ``LIBRARY_FILES`` nodes consult the project to resolve coordinates.
"""

from typing import Optional

from .errors import UnknownArtifactError
from .ide_artifacts import (
    ArchiveNode,
    ArtifactContainer,
    ArtifactRefNode,
    DirectoryContentNode,
    DirectoryNode,
    ExtractedDirectoryNode,
    FileNode,
    LibraryFilesNode,
    ModuleOutputNode,
    ModuleSourceNode,
    ModuleTestOutputNode,
    TopLevelArtifact,
)
from .project_models import ProjectModel


def _source_files(paths: list, project: ProjectModel) -> list:
    return [project.resolve_path(p).as_posix() for p in paths]


def artifact_to_map(node, project: ProjectModel, artifacts: Optional[ArtifactContainer] = None) -> dict:
    """Map a single artifact node (and its subtree) to a dict.

    Args:
        node: Any artifact node.
        project: Project used to resolve source paths and configurations.
        artifacts: Top-level collection that ``ARTIFACT_REF`` targets must
            exist in. Only subtrees without references may omit it.

    Returns:
        The node as a JSON-compatible dict.

    Raises:
        UnknownArtifactError: If a reference does not resolve, or a reference
            is found and no collection was given.
        UnresolvedConfigurationError: If a library configuration is unknown.
    """
    if isinstance(node, (TopLevelArtifact, DirectoryNode, ArchiveNode)):
        return {
            "type": node.type.value,
            "name": node.name,
            "children": [artifact_to_map(c, project, artifacts) for c in node.children],
        }
    if isinstance(node, (FileNode, DirectoryContentNode, ExtractedDirectoryNode)):
        return {"type": node.type.value, "sourceFiles": _source_files(node.paths, project)}
    if isinstance(node, (ModuleSourceNode, ModuleOutputNode, ModuleTestOutputNode)):
        return {"type": node.type.value, "moduleName": node.module_name}
    if isinstance(node, LibraryFilesNode):
        cfg = project.resolve_configuration(node.configuration)
        return {"type": node.type.value, "libraries": [lib.coordinates() for lib in cfg.libraries]}
    if isinstance(node, ArtifactRefNode):
        if artifacts is None:
            raise UnknownArtifactError(
                f"Artifact '{node.artifact_name}' cannot be resolved without an artifact collection"
            )
        artifacts.get(node.artifact_name)
        return {"type": node.type.value, "artifactName": node.artifact_name}
    raise TypeError(f"Unsupported artifact node: {node!r}")


def artifacts_to_map(artifacts: ArtifactContainer, project: ProjectModel) -> dict:
    """Map the whole top-level collection to ``{"artifacts": [...]}``."""
    return {"artifacts": [artifact_to_map(a, project, artifacts) for a in artifacts]}
