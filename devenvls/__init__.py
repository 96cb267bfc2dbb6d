"""devenvls - completion of devenv options in Nix files."""

__version__ = "0.1.0"
