import pytest

from devenvls.options.schema import OptionSchemaIndex


DEVENV_OPTIONS = {
    "languages": {
        "python": {
            "enable": {"description": "Whether to enable tools for Python development."},
            "version": {"description": "The Python version to use."},
        },
        "rust": {
            "enable": {"description": "Whether to enable tools for Rust development."},
        },
    },
    "services": {
        "postgres": {
            "enable": {"description": "Enable Postgres"},
            "package": {"description": "Which version of PostgreSQL to use"},
            "settings": {
                "description": "PostgreSQL configuration.",
                "port": {"description": "Port to listen on"},
            },
            "initialDatabases": "not-a-mapping",
        },
        "redis": {
            "enable": {"description": "Whether to enable Redis process and expose utilities."},
        },
    },
    "env": {"description": "Environment variables to be exposed inside the developer environment."},
    "enterShell": {"description": "Bash code to execute when entering the shell."},
}


@pytest.fixture
def devenv_options():
    return DEVENV_OPTIONS


@pytest.fixture
def option_index():
    return OptionSchemaIndex.from_dict(DEVENV_OPTIONS)
