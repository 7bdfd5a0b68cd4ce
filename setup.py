#!/usr/bin/env python
import setuptools
from setuptools import setup

setup(
    name="freightdesk",
    version="0.0.1",
    description="Carrier rule, towing and purchase tariff resolution for RoRo quotations",
    maintainer="Freight Desk Developers",
    packages=setuptools.find_packages(exclude=["*.tests", "*.tests.*"]),
    package_data={"ports": ["data/*.json"]},
    install_requires=[
        "dj-database-url",
        "django",
        "django_extensions",
        "djangorestframework",
        "gunicorn",
        "psycopg2-binary",
        "python-dotenv",
        "sentry-sdk",
    ],
    extras_require={
        "test": [
            "factory-boy",
            "Faker",
            "freezegun",
            "pytest",
            "pytest-django",
            "python-dateutil",
        ],
    },
)
