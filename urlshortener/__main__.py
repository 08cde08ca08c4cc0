import os
import sys


def main(argv=None):
    """Run a Django management command, e.g. ``urlshortener runserver``."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'urlshortener.settings')

    from django.core.management import execute_from_command_line
    execute_from_command_line(sys.argv if argv is None else argv)


if __name__ == '__main__':
    main()
