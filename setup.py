from setuptools import setup, find_packages

setup(
    name="devconfigs",
    version="0.1.0",
    description="devconfigs backs up and restores personal configuration - encrypting SSH keys, GPG keyrings and preferences into a version-controlled directory.",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=["pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "devconfigs=devconfigs.main:main",
        ],
    },
    python_requires=">=3.9",
)
