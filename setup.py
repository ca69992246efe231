"""
credstrategy setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
import re

from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# read version string from credstrategy without importing it
with open(os.path.join(root_dir, "credstrategy", "__init__.py"), encoding="utf-8") as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

#=============================================================================
# static text
#=============================================================================
SUMMARY = "pluggable password encoding strategies with transparent upgrades"

DESCRIPTION = """\
credstrategy stores and verifies user credentials through interchangeable
password encoding strategies: a legacy unsalted digest, an iterated salted
digest, bcrypt & argon2. Strategies are kept in a registry with a single
default, and stored credentials are re-encoded with the default strategy
when users authenticate, so a user base migrates off weak encodings without
forced resets. Records that can't be upgraded are flagged for a new password.
"""

KEYWORDS = """\
password secret hash security
bcrypt argon2 upgrade migration
"""

CLASSIFIERS = """\
Intended Audience :: Developers
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: 3 :: Only
Programming Language :: Python :: Implementation :: CPython
Programming Language :: Python :: Implementation :: PyPy
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 4 - Beta")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["credstrategy", "credstrategy.*"]),
    zip_safe=True,
    python_requires=">=3.9",

    # metadata
    name="credstrategy",
    version=version,

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    install_requires=[
        "argon2-cffi>=23.1",
        "bcrypt>=4.1",
        "typing_extensions>=4.6",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "pytest-archon>=0.0.6",
        ],
    },
)

#=============================================================================
# eof
#=============================================================================
