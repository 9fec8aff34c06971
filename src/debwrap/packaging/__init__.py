"""
The `packaging` sub-package contains modules related to the construction of
Debian meta-packages.

This includes:
- Rendering the maintainer scripts and PATH wrappers staged into the package.
- Staging the package tree and invoking external tools like `dpkg-deb`.
"""
