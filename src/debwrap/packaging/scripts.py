"""Templates for the maintainer scripts and PATH wrappers of a meta-package."""

import jinja2

from ..models import Ecosystem

RUBYGEMS_POSTINST = """\
#!/usr/bin/ruby
puts `gem install {{ package }} -v {{ version }} --no-document`
"""

RUBYGEMS_PRERM = """\
#!/usr/bin/ruby
puts `gem uninstall {{ package }} -v {{ version }} -ax`
"""

RUBYGEMS_WRAPPER = """\
#!/usr/bin/ruby
require 'rubygems'
Gem.path.each do |path|
  bin_path = "#{path}/bin/{{ executable }}"
  if File.exist?(bin_path)
    exec(bin_path, *ARGV)
    break
  end
end
"""

PYPI_POSTINST = """\
#!/usr/bin/python3
import subprocess
subprocess.run(["pip3", "install", "{{ package }}=={{ version }}", "--no-compile"], check=True)
"""

PYPI_PRERM = """\
#!/usr/bin/python3
import subprocess
subprocess.run(["pip3", "uninstall", "-y", "{{ package }}"], check=True)
"""

PYPI_WRAPPER = """\
#!/usr/bin/python3
import os
import sys
import sysconfig

this_script = os.path.realpath(__file__)
for scheme in sysconfig.get_scheme_names():
    bin_path = os.path.join(sysconfig.get_path("scripts", scheme), "{{ executable }}")
    if os.path.isfile(bin_path) and os.path.realpath(bin_path) != this_script:
        os.execv(bin_path, [bin_path] + sys.argv[1:])
        break
"""

_TEMPLATES: dict[str, dict[str, str]] = {
    "rubygems": {
        "postinst": RUBYGEMS_POSTINST,
        "prerm": RUBYGEMS_PRERM,
        "wrapper": RUBYGEMS_WRAPPER,
    },
    "pypi": {
        "postinst": PYPI_POSTINST,
        "prerm": PYPI_PRERM,
        "wrapper": PYPI_WRAPPER,
    },
}


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.DictLoader(
            {
                f"{ecosystem}/{kind}": source
                for ecosystem, sources in _TEMPLATES.items()
                for kind, source in sources.items()
            }
        ),
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )


_ENV = _get_template_env()


def _render(ecosystem: Ecosystem, kind: str, **context: str) -> str:
    return _ENV.get_template(f"{ecosystem.name}/{kind}").render(**context)


def render_postinst(ecosystem: Ecosystem, package: str, version: str) -> str:
    """Script run after installation: installs the foreign package."""
    return _render(ecosystem, "postinst", package=package, version=version)


def render_prerm(ecosystem: Ecosystem, package: str, version: str) -> str:
    """Script run before removal: uninstalls the foreign package."""
    return _render(ecosystem, "prerm", package=package, version=version)


def render_wrapper(ecosystem: Ecosystem, executable: str) -> str:
    return _render(ecosystem, "wrapper", executable=executable)
