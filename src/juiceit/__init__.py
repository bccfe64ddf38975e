"""juiceit - rip every title from a DVD with HandBrakeCLI."""

__version__ = "1.1.0"
