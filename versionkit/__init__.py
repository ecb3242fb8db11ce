"""
versionkit - version resolution, caching and installation of CLI tools.

Resolves a version request ('1.9.8', 'latest', 'skip' or a pin file) to an
exact release, installs it into a per-version tool cache and reports
the installed binary's own version.
"""

__version__ = "0.1.0"
