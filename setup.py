from setuptools import setup, find_packages

setup(
    name="view-mailer",
    version="0.1.0",
    description="Compose emails by rendering Jinja2 views, mirroring controller action results",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "Jinja2>=3.0.0",
        "email-validator>=2.0.0",
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "PyYAML>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "view-mailer=view_mailer.cli:main",
        ],
    },
)
