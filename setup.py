"""
Setup script for omp-browser.
"""

from setuptools import setup, find_packages, Command
import sys
import subprocess


class TestCommand(Command):
    """Run the test suite."""
    description = 'Run unit tests with pytest'
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        """Run all tests."""
        print("Running omp-browser Tests")
        print("=" * 50)

        try:
            subprocess.run([sys.executable, '-m', 'pytest', 'tests/', '-v'], check=True)
            print("✓ Tests passed")
        except subprocess.CalledProcessError:
            print("✗ Tests failed")
            sys.exit(1)
        except FileNotFoundError:
            print("⚠ pytest not installed. Run: pip install -e .[dev]")
            sys.exit(1)


# Read long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setup(
    name="omp-browser",
    version="0.2.0",
    description="Terminal server browser for open.mp",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['omp_browser*']),
    install_requires=[
        "aiohttp>=3.8.0",
        "aiofiles>=23.1.0",
        "jsonpath-ng>=1.6.0",
        "pyyaml>=6.0",
        "windows-curses>=2.3.0;sys_platform=='win32'",
    ],
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-asyncio>=0.21.0',
            'black>=23.0.0',
            'mypy>=1.0.0',
            'ruff>=0.1.0',
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "omp-browser=omp_browser.__main__:main",
        ],
    },
    cmdclass={
        'test': TestCommand,
    },
    license="GPL-3.0-or-later",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console :: Curses",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Games/Entertainment",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="open.mp samp server-browser curses terminal",
)
