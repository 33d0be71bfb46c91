from setuptools import setup, find_packages

setup(
    name="media-grabber",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "typer",
        "rich",
        "pymonad>=2.4.0",
        "toolz",
        "yt-dlp",
        "PyYAML",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-mock",
            "ruff",
            "setuptools",
            "wheel",
            "twine",
        ]
    },
    entry_points={
        "console_scripts": [
            "media-grabber = media_grabber.cli:app",
        ],
    },
    description="An interactive yt-dlp front end that files downloads into dated folders.",
    long_description=open("README.adoc", encoding="utf-8").read(),
    long_description_content_type="text/plain",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Video",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.8",
)
