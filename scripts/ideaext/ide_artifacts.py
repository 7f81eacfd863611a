"""IDE artifact tree model.

An artifact is an ordered tree of typed nodes describing a packaging layout:
files, directories, zip/jar archives, directory contents, extracted archives,
module sources and outputs, library files and references to other top-level
artifacts. Building the tree performs no I/O; source paths are kept as given
and resolved against the project directory later, by the serializer or the
builder.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from .errors import SettingsError, UnknownArtifactError
from .project_models import DependencyConfiguration


class ArtifactType(Enum):
    """Node discriminator. Values are the ``type`` tags of the IDE document."""
    ARTIFACT = "ARTIFACT"
    DIR = "DIR"
    ARCHIVE = "ARCHIVE"
    FILE = "FILE"
    DIR_CONTENT = "DIR_CONTENT"
    EXTRACTED_DIR = "EXTRACTED_DIR"
    MODULE_SRC = "MODULE_SRC"
    MODULE_OUTPUT = "MODULE_OUTPUT"
    MODULE_TEST_OUTPUT = "MODULE_TEST_OUTPUT"
    LIBRARY_FILES = "LIBRARY_FILES"
    ARTIFACT_REF = "ARTIFACT_REF"


def _check_name(name: str) -> str:
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise SettingsError(f"Artifact element name must be a single path segment, got '{name}'")
    return name


# ── Leaf nodes ────────────────────────────────────────────────────────────────

@dataclass
class FileNode:
    paths: list
    type = ArtifactType.FILE


@dataclass
class DirectoryContentNode:
    paths: list
    type = ArtifactType.DIR_CONTENT


@dataclass
class ExtractedDirectoryNode:
    paths: list
    type = ArtifactType.EXTRACTED_DIR


@dataclass
class ModuleSourceNode:
    module_name: str
    type = ArtifactType.MODULE_SRC


@dataclass
class ModuleOutputNode:
    module_name: str
    type = ArtifactType.MODULE_OUTPUT


@dataclass
class ModuleTestOutputNode:
    module_name: str
    type = ArtifactType.MODULE_TEST_OUTPUT


@dataclass
class LibraryFilesNode:
    """Files of a dependency configuration, given by name or as an object."""
    configuration: Union[str, DependencyConfiguration]
    type = ArtifactType.LIBRARY_FILES


@dataclass
class ArtifactRefNode:
    artifact_name: str
    type = ArtifactType.ARTIFACT_REF


# ── Containers ────────────────────────────────────────────────────────────────

@dataclass
class _Container:
    """Builder operations shared by directories, archives and top-level artifacts.

    Every operation appends a child in declaration order. Operations that
    create a container return it, after calling ``configure`` (if given) with
    the new child so nested layouts can be declared in place::

        root.directory("lib", lambda lib: lib.library_files("runtimeClasspath"))
    """
    name: str
    children: list = field(default_factory=list)

    def _add(self, node):
        self.children.append(node)
        return node

    def _add_container(self, node, configure):
        self._add(node)
        if configure is not None:
            configure(node)
        return node

    def file(self, *paths) -> FileNode:
        return self._add(FileNode(list(paths)))

    def directory(self, name: str, configure: Optional[Callable] = None) -> "DirectoryNode":
        return self._add_container(DirectoryNode(_check_name(name)), configure)

    def archive(self, name: str, configure: Optional[Callable] = None) -> "ArchiveNode":
        return self._add_container(ArchiveNode(_check_name(name)), configure)

    def directory_content(self, *paths) -> DirectoryContentNode:
        return self._add(DirectoryContentNode(list(paths)))

    def extracted_directory(self, *paths) -> ExtractedDirectoryNode:
        return self._add(ExtractedDirectoryNode(list(paths)))

    def module_src(self, module_name: str) -> ModuleSourceNode:
        return self._add(ModuleSourceNode(module_name))

    def module_output(self, module_name: str) -> ModuleOutputNode:
        return self._add(ModuleOutputNode(module_name))

    def module_test_output(self, module_name: str) -> ModuleTestOutputNode:
        return self._add(ModuleTestOutputNode(module_name))

    def library_files(self, configuration) -> LibraryFilesNode:
        return self._add(LibraryFilesNode(configuration))

    def artifact(self, name: str) -> ArtifactRefNode:
        return self._add(ArtifactRefNode(name))


@dataclass
class DirectoryNode(_Container):
    type = ArtifactType.DIR


@dataclass
class ArchiveNode(_Container):
    type = ArtifactType.ARCHIVE


@dataclass
class TopLevelArtifact(_Container):
    """Named root of an artifact tree; materializes as ``<destination>/<name>``."""
    type = ArtifactType.ARTIFACT


CONTAINER_NODES = (TopLevelArtifact, DirectoryNode, ArchiveNode)


class ArtifactContainer:
    """Insertion-ordered registry of top-level artifacts, keyed by name."""

    def __init__(self):
        self._artifacts = OrderedDict()

    def create(self, name: str, configure: Optional[Callable] = None) -> TopLevelArtifact:
        """Return the artifact called ``name``, creating it on first use.

        Args:
            name: Artifact name (a single path segment).
            configure: Optional callable invoked with the artifact, on both
                creation and later lookups, so configuration can be split
                across several calls.
        """
        art = self._artifacts.get(name)
        if art is None:
            art = TopLevelArtifact(_check_name(name))
            self._artifacts[name] = art
        if configure is not None:
            configure(art)
        return art

    def get(self, name: str) -> TopLevelArtifact:
        try:
            return self._artifacts[name]
        except KeyError:
            raise UnknownArtifactError(f"Artifact '{name}' is not defined") from None

    def names(self) -> list:
        return list(self._artifacts)

    def __contains__(self, name) -> bool:
        return name in self._artifacts

    def __iter__(self):
        return iter(self._artifacts.values())

    def __len__(self) -> int:
        return len(self._artifacts)
