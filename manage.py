#!/usr/bin/env python
"""Command-line entry point for running and maintaining freightdesk."""
import os
import sys
import warnings

import dotenv


def set_django_settings_module():
    """
    Pick the settings module from the command being run and the ENV
    variable, unless DJANGO_SETTINGS_MODULE is already set.

    Test runs use ``settings.test``, ``ENV=dev`` uses ``settings.dev`` and
    everything else the production settings.
    """
    in_test = not {"pytest", "test"}.isdisjoint(sys.argv[1:])
    in_dev = not in_test and str(os.environ.get("ENV")).upper() == "DEV"
    if in_test:
        settings_module = "settings.test"
    elif in_dev:
        settings_module = "settings.dev"
    else:
        settings_module = "settings"
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module)


def main():
    set_django_settings_module()

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is freightdesk installed in the active "
            "virtual environment?",
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        dotenv.load_dotenv()
    main()
