# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "hashdrop"
__summary__ = "A content-addressed file upload service with short names."

__version__ = "0.1.0"

__install_requires__ = [
    "fastapi>=0.100",
    "filetype>=1.2",
    "fs>=2.4",
    "pydantic-settings>=2.0",
    # pyfilesystem2 declares its namespace through pkg_resources.
    "setuptools<81",
    "uvicorn>=0.23",
]
__tests_require__ = ["pytest", "httpx"]

__author__ = "hashdrop contributors"

__license__ = "MIT License"
