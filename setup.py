"""Setup script for the bpmn-manager package."""

from setuptools import find_packages, setup

setup(
    name="bpmn-manager",
    version="1.0.0",
    description="Terminal dashboard and Python client for a BPMN workflow-engine API",
    author="Your Name",
    author_email="your.email@example.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "bpmn_manager": ["decisions.yaml"],
        "bpmn_manager.dashboard": ["styles/*.tcss"],
    },
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "requests>=2.28",
        "rich>=13.0",
        "textual>=0.80",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bpmn-manager=bpmn_manager.dashboard.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console :: Curses",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
