"""Tests for artifact_serializer.py: artifact trees as IDE documents."""

import json

import pytest

from ideaext.artifact_serializer import artifact_to_map, artifacts_to_map
from ideaext.errors import UnknownArtifactError, UnresolvedConfigurationError
from ideaext.ide_artifacts import TopLevelArtifact


def _path(project, relative):
    return (project.project_dir / relative).as_posix()


class TestArtifactsTree:
    def test_full_tree(self, project, artifacts, junit_libraries):
        project.add_configuration("testCfg", junit_libraries)

        def art1(a):
            def dir1(d):
                d.file("file.txt")
                d.archive("arch1", lambda arch: (arch.directory_content("dir"), arch.library_files("testCfg")))
                d.module_output("moduleName")
            a.directory("dir1", dir1)

        artifacts.create("art1", art1)
        artifacts.create("art2", lambda a: (a.artifact("art1"), a.extracted_directory("my.zip")))

        assert artifacts_to_map(artifacts, project) == {
            "artifacts": [
                {
                    "type": "ARTIFACT",
                    "name": "art1",
                    "children": [
                        {
                            "type": "DIR",
                            "name": "dir1",
                            "children": [
                                {"type": "FILE", "sourceFiles": [_path(project, "file.txt")]},
                                {
                                    "type": "ARCHIVE",
                                    "name": "arch1",
                                    "children": [
                                        {"type": "DIR_CONTENT", "sourceFiles": [_path(project, "dir")]},
                                        {
                                            "type": "LIBRARY_FILES",
                                            "libraries": [
                                                {"group": "junit", "artifact": "junit", "version": "4.12"},
                                                {"group": "org.hamcrest", "artifact": "hamcrest-core", "version": "1.3"},
                                            ],
                                        },
                                    ],
                                },
                                {"type": "MODULE_OUTPUT", "moduleName": "moduleName"},
                            ],
                        },
                    ],
                },
                {
                    "type": "ARTIFACT",
                    "name": "art2",
                    "children": [
                        {"type": "ARTIFACT_REF", "artifactName": "art1"},
                        {"type": "EXTRACTED_DIR", "sourceFiles": [_path(project, "my.zip")]},
                    ],
                },
            ]
        }

    def test_key_order_matches_ide_document(self, project):
        root = TopLevelArtifact("art")
        root.directory("d")
        text = json.dumps(artifact_to_map(root, project))
        assert text == '{"type": "ARTIFACT", "name": "art", "children": [{"type": "DIR", "name": "d", "children": []}]}'

    def test_children_keep_declaration_order(self, project):
        root = TopLevelArtifact("art")
        root.module_test_output("z")
        root.module_src("a")
        root.archive("m.jar")
        root.directory("b")
        kinds = [c["type"] for c in artifact_to_map(root, project)["children"]]
        assert kinds == ["MODULE_TEST_OUTPUT", "MODULE_SRC", "ARCHIVE", "DIR"]

    def test_serialization_is_idempotent(self, project, artifacts, junit_libraries):
        project.add_configuration("cfg", junit_libraries)
        artifacts.create("one", lambda a: (a.file("x.txt", "y.txt"), a.library_files("cfg")))
        artifacts.create("two", lambda a: a.artifact("one"))
        first = json.dumps(artifacts_to_map(artifacts, project))
        second = json.dumps(artifacts_to_map(artifacts, project))
        assert first == second

    def test_multiple_source_files_in_order(self, project):
        root = TopLevelArtifact("art")
        root.file("b.txt", "a.txt")
        assert artifact_to_map(root, project)["children"][0]["sourceFiles"] == [
            _path(project, "b.txt"),
            _path(project, "a.txt"),
        ]

    def test_does_not_touch_file_system(self, project):
        root = TopLevelArtifact("art")
        root.file("does-not-exist.txt")
        root.module_src("unknown-module")
        artifact_to_map(root, project)
        assert not project.build_dir.exists()

    def test_dangling_reference(self, project, artifacts):
        artifacts.create("art", lambda a: a.artifact("ghost"))
        with pytest.raises(UnknownArtifactError):
            artifacts_to_map(artifacts, project)

    def test_unknown_configuration(self, project):
        root = TopLevelArtifact("art")
        root.library_files("missing")
        with pytest.raises(UnresolvedConfigurationError):
            artifact_to_map(root, project)

    def test_reference_needs_collection(self, project):
        root = TopLevelArtifact("art")
        root.directory("d", lambda d: d.artifact("other"))
        with pytest.raises(UnknownArtifactError, match="without an artifact collection"):
            artifact_to_map(root, project)

    def test_reference_checked_against_collection(self, project, artifacts):
        artifacts.create("other")
        root = artifacts.create("art", lambda a: a.artifact("other"))
        assert artifact_to_map(root, project, artifacts)["children"] == [
            {"type": "ARTIFACT_REF", "artifactName": "other"},
        ]
