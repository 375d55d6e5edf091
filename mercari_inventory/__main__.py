"""python -m mercari_inventory"""
import sys

from .cli.commands import run_cli

sys.exit(run_cli())
