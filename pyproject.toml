[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xvkit"
version = "0.1.0"
description = "Small Unix-style file tools, a regex matcher, a free-list allocator, a shell command parser and RISC-V/virtio layout helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["unix", "shell", "grep", "allocator", "riscv", "virtio", "printf"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xv-grep = "xvkit.matching:main_grep"
xv-cat = "xvkit.coreutils:main_cat"
xv-echo = "xvkit.coreutils:main_echo"
xv-wc = "xvkit.coreutils:main_wc"
xv-mkdir = "xvkit.coreutils:main_mkdir"
xv-rm = "xvkit.coreutils:main_rm"
xv-ln = "xvkit.coreutils:main_ln"
xv-kill = "xvkit.coreutils:main_kill"
xv-sleep = "xvkit.coreutils:main_sleep"
xv-find = "xvkit.fsutils:main_find"
xv-ls = "xvkit.fsutils:main_ls"
xv-primes = "xvkit.primes:main"

[tool.hatch.build.targets.wheel]
packages = ["xvkit"]

[tool.pytest.ini_options]
addopts = "-ra"
