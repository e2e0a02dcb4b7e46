from pathlib import Path


def find_project_root(start: Path) -> Path:
    """Return the nearest parent holding pyproject.toml, else the working directory."""
    root_marker = "pyproject.toml"
    for parent in [start, *start.parents]:
        if (parent / root_marker).exists():
            return parent
    # installed as a regular package: .env and feeds.json live where it is run
    return Path.cwd()
project_root = find_project_root(Path(__file__).parent)
