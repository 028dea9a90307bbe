#!/usr/bin/env python3
"""
Command-line interface for Quire - static site generator.
"""

import os
import sys
import shutil
import argparse
from typing import List, Optional

from . import __version__
from .core import Quire
from .errors import QuireError
from .settings import SiteSettings

PACKAGE_TEMPLATES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


def init_templates(input_dir: str, config_path: Optional[str] = None) -> List[str]:
    """Copy the bundled templates into the project's templates directory.

    Existing files are left untouched.

    Returns:
        Paths of the template files that were created
    """
    site = SiteSettings(config_dir=input_dir, config_file=config_path).load_settings()
    template_dest = os.path.join(input_dir, site.templates_path)
    os.makedirs(template_dest, exist_ok=True)

    created = []
    for template_file in sorted(os.listdir(PACKAGE_TEMPLATES)):
        if not template_file.endswith('.html'):
            continue
        src_path = os.path.join(PACKAGE_TEMPLATES, template_file)
        dest_path = os.path.join(template_dest, template_file)
        if os.path.exists(dest_path):
            print(f"Template already exists: {dest_path}")
        else:
            shutil.copy2(src_path, dest_path)
            print(f"Created template: {dest_path}")
            created.append(dest_path)
    return created


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quire',
        description='Quire - build a static HTML site from a folder of markdown files',
    )
    parser.add_argument('input_folder',
                        help='Input folder containing the configuration, content and templates')
    parser.add_argument('output_folder', nargs='?', default=None,
                        help='Folder in which the site directory is generated (defaults to the input folder)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a configuration file (defaults to quire.yaml in the input folder)')
    parser.add_argument('--debug', action='store_true',
                        help='Print debug messages')
    parser.add_argument('--init-templates', action='store_true',
                        help='Copy the default templates into the project and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        if args.init_templates:
            init_templates(args.input_folder, args.config)
            return 0

        generator = Quire(
            input_dir=args.input_folder,
            output_root=args.output_folder,
            config_path=args.config,
            debug=args.debug,
        )
        generator.build()
    except QuireError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (IOError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
