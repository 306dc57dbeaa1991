# xvn

Building blocks for switching Node.js versions automatically as you move
between project directories. xvn finds the version a project asks for, picks
a version manager that can provide it (nvm or fnm) and produces the shell
commands that switch to it.

The package has no runtime dependencies beyond the standard library. nvm
and fnm themselves are run as subprocesses when they are queried.

## What it does

- **Version files** (`xvn.version_file.finder`). Walks up from a directory
  towards your home directory (or the filesystem root) and looks for
  `.nvmrc`, `.node-version`, `package.json` (its `engines.node` field) or
  any other names you choose, in the order you give.
- **Version managers** (`xvn.plugins`). `NvmPlugin` and `FnmPlugin` check
  whether their manager is installed, which versions it holds, and what its
  default version is. They build `use` and `install` commands with the
  version shell-quoted by `shell_escape`. `PluginRegistry` keeps them in
  priority order.
- **Semver ranges** (`xvn.version_file.resolver`). `SemverResolver` turns
  ranges such as `^20.0.0`, `~18.20.0`, `>=18`, `<21` or `18.*` into the
  highest installed version that satisfies them. Exact versions, anything
  that is not a range (such as `lts/hydrogen`) and ranges with no installed
  match come back unchanged. `Version` and `VersionReq` are usable on their
  own.
- **Shell hand-off** (`xvn.shell`). `CommandWriter` sends commands to the
  parent shell on file descriptor 3 (bash and zsh); `JsonCommandWriter`
  emits a marked JSON block for PowerShell.
- **Shell setup** (`xvn.setup`). Detects bash or zsh from `$SHELL` and adds,
  replaces or removes the xvn block in the profile file.

## Finding a project's version

```python
from pathlib import Path

from xvn.version_file.finder import VersionFile

found = VersionFile.find(Path.cwd(), [".nvmrc", ".node-version", "package.json"])
if found is not None:
    print(found.version, found.path, found.source)
```

`find` returns `None` when no file is found. An empty version file, or one
holding only comments, raises `VersionFileError`, as does a start directory
that does not exist. A `package.json` without `engines.node`, or one that
cannot be parsed, is skipped and the search goes on. `PackageJson.parse` in
`xvn.version_file.package_json` reads a `package.json` directly.

## Choosing a version manager

```python
from xvn.plugins.registry import PluginRegistry

registry = PluginRegistry(["nvm", "fnm"])
plugin = registry.find_plugin_with_version("18.20.0")
if plugin is None:
    fallback = registry.find_available_plugin()
    if fallback is not None:
        print(fallback.install_command("18.20.0"))
else:
    print(plugin.activate_command("18.20.0"))   # nvm use 18.20.0
```

Unknown names in the list are ignored and the order of the list is the
priority order; with no list, the order is nvm then fnm.
`PluginRegistry.with_plugins` builds a registry from plugin instances you
already have, and `get_plugin` and `available_plugins` look plugins up.

`MockPlugin` in `xvn.plugins.mock` is an in-memory plugin whose
availability and versions you set yourself, for tests.

## Resolving semver ranges

```python
from xvn.plugins.mock import MockPlugin
from xvn.version_file.resolver import SemverResolver

manager = MockPlugin("nvm")
manager.available_versions = ["18.20.0", "20.5.0", "20.11.0"]
print(SemverResolver(manager).resolve("^20.0.0"))   # 20.11.0
```

## Handing commands to the shell

```python
from xvn.shell.fd3 import CommandWriter

writer = CommandWriter()
writer.write_command("nvm use 18.20.0")
```

When descriptor 3 is not open, commands are quietly discarded;
`is_available()` tells you which case you are in.

For PowerShell, collect commands with `JsonCommandWriter` and call `write`:

```python
import sys

from xvn.shell.json_writer import JsonCommandWriter

writer = JsonCommandWriter()
writer.export_env("NODE_VERSION", "18.20.0")
writer.prepend_path(r"C:\nvm\v18.20.0")
writer.write(sys.stdout)
```

Nothing is written when no commands were queued.
`OutputProtocol.from_env()` in `xvn.shell.protocol` picks JSON on Windows or
when `PSModulePath` is set, and file descriptor 3 otherwise.

## Setting up a shell profile

```python
from xvn.setup.installer import SetupInstaller

profile = SetupInstaller().install()
print(profile)
```

The shell is taken from `$SHELL` (bash and zsh are supported). The first
existing profile file is updated, for example `~/.bashrc` or `~/.zshrc`, or
the first candidate is created if none exists, and any earlier xvn block in
it is replaced. `remove_from_profile` in `xvn.setup.profile_modification`
removes the block again.

## What it does not do

This package is a library. It installs no `xvn` command, reads no
configuration file (such as `~/.xvnrc`), does not run the directory-change
hook in your shell, and does not prompt to install missing Node.js
versions. Wiring the pieces above together into that flow is left to the
caller.