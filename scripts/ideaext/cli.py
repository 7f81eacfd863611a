"""CLI entry point: evaluates a settings script, then serializes or builds.

The settings script is a Python file defining ``configure(project, settings)``.
It registers modules and dependency configurations on the ``ProjectModel``
and declares IDE settings and artifacts on the ``ProjectSettings``.
"""

import argparse
import logging
import runpy
import sys
from pathlib import Path
from typing import Optional

from .artifact_builder import DEFAULT_DESTINATION, ArtifactBuilder
from .errors import IdeaExtError
from .project_models import ProjectModel
from .project_settings import ProjectSettings

DEFAULT_SCRIPT = "ideasettings.py"


def load_settings(project_dir: Path, script: Optional[Path] = None) -> ProjectSettings:
    """Evaluate the settings script of a project.

    Args:
        project_dir: Project root directory.
        script: Settings script; relative paths resolve against ``project_dir``.
            Defaults to ``ideasettings.py``.

    Returns:
        The populated ProjectSettings (its ``project`` holds the model).

    Raises:
        IdeaExtError: If the script is missing or defines no ``configure``.
    """
    project = ProjectModel(project_dir)
    script_path = project.resolve_path(script or DEFAULT_SCRIPT)
    if not script_path.is_file():
        raise IdeaExtError(f"No settings script found at {script_path}")

    namespace = runpy.run_path(str(script_path))
    configure = namespace.get("configure")
    if not callable(configure):
        raise IdeaExtError(f"{script_path} does not define configure(project, settings)")

    settings = ProjectSettings(project)
    configure(project, settings)
    return settings


def _write(path: Path, content: str):
    """Write content to a file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    print(f"  ✓ {path}")


def run_json(settings: ProjectSettings, output: Optional[Path] = None):
    content = settings.to_json()
    if output is None:
        print(content)
    else:
        _write(settings.project.resolve_path(output), content + "\n")


def run_build_artifact(settings: ProjectSettings, name: str, destination: Optional[Path] = None):
    artifact = settings.ide_artifacts.get(name)
    builder = ArtifactBuilder(settings.project, settings.ide_artifacts)
    result = builder.create_artifact(artifact, destination)
    print(f"  ✓ {result}")


def run_list_artifacts(settings: ProjectSettings):
    for name in settings.ide_artifacts.names():
        print(name)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="idea-ext",
        description="Serialize IDE project settings and build IDE artifacts",
    )
    parser.add_argument("project", type=Path, help="Path to the project root")
    parser.add_argument(
        "--script", "-s", type=Path, default=None,
        help=f"Settings script (default: {DEFAULT_SCRIPT} in the project root)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    json_cmd = sub.add_parser("json", help="Print the IDE settings document")
    json_cmd.add_argument("--output", "-o", type=Path, default=None, help="Write to a file instead of stdout")

    build_cmd = sub.add_parser("build-artifact", help="Materialize an IDE artifact")
    build_cmd.add_argument("name", help="Artifact name")
    build_cmd.add_argument(
        "--destination", "-d", type=Path, default=None,
        help=f"Output directory (default: build/{DEFAULT_DESTINATION})",
    )

    sub.add_parser("list-artifacts", help="List artifact names in declaration order")
    return parser.parse_args(argv)


def main(argv=None):
    """CLI entry point. Exits with status 1 on any idea-ext error."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.project, args.script)
        if args.command == "json":
            run_json(settings, args.output)
        elif args.command == "build-artifact":
            run_build_artifact(settings, args.name, args.destination)
        else:
            run_list_artifacts(settings)
    except IdeaExtError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
