from importlib.machinery import SourceFileLoader
from pathlib import Path
from types import ModuleType

from setuptools import find_packages, setup

loader = SourceFileLoader("slidez", "./src/slidez/__init__.py")
slidez = ModuleType(loader.name)
loader.exec_module(slidez)

setup(
    name="slidez",
    version=slidez.__version__,  # type: ignore
    description="Build self-contained HTML slide decks from Markdown.",
    long_description=(Path(__file__).parent / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    author="m09",
    python_requires=">=3.12",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests"]),
    package_data={"slidez": ["resources/*"]},
    entry_points={"console_scripts": ["slidez=slidez.cli:main"]},
    install_requires=[
        "appdirs",
        "beautifulsoup4>=4.10",
        "cyclopts>=3",
        "Jinja2>=3",
        "MarkupSafe>=2",
        "pydantic>=2",
        "pygit2",
        "Pygments",
        "PyYAML",
        "rich",
        "watchfiles",
    ],
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
