"""CLI 모듈"""
from .commands import CLI, CLIConfig, ColorOutput, create_parser, run_cli

__all__ = ["CLI", "CLIConfig", "ColorOutput", "create_parser", "run_cli"]
