"""
ConfigCommand — Display and change configuration
"""

from .base import BaseCommand


class ConfigCommand(BaseCommand):
    """Configuration display and modification."""

    def show_config(self) -> int:
        print(self._cli.config_manager.display())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """Set a configuration value."""
        manager = self._cli.config_manager
        error = manager.set(key, value, scope)
        if error:
            self.error(error)
            return 1

        path = manager.project_config_path if scope == "project" else manager.user_config_path
        print(f"{self.symbols.check_pass} Set {key} = {manager.get(key)}")
        print(f"  Saved to {path}")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., resolver.base_package=java.lang)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    cmd = ConfigCommand(cli)
    if args.set:
        if '=' not in args.set:
            cmd.error("Use --set KEY=VALUE")
            return 1
        key, value = args.set.split('=', 1)
        return cmd.set_config(key.strip(), value.strip(), "user" if args.user else "project")
    return cmd.show_config()
