from pathlib import Path
from devconfigs.log import logger

OPTION_DESCRIPTIONS = {
    "backup": "Backup configurations",
    "restore": "Restore configurations",
    "sync-to": "Sync to the config directory",
    "sync-from": "Sync from the config directory",
    "check": "Check for missing or outdated packages",
}

TEMPLATE = """\
#compdef devconfigs
# Zsh completion script for devconfigs

_devconfigs() {{
  local -a subcommands
  local -a options

  subcommands=(
{subcommands}
  )

  options=(
{options}
  )

  _arguments \\
    '1: :->subcommand' \\
    '2: :->option' \\
    '*:: :->args'

  case $state in
    subcommand)
      _describe 'subcommand' subcommands
      ;;
    option)
      _describe 'option' options
      ;;
  esac
}}

compdef _devconfigs devconfigs
"""


def render_completions(subcommands: dict) -> str:
    """
    Renders the zsh completion script.

    Parameters:
        subcommands (dict): Maps each subcommand name to its description.
    """
    subcommand_lines = "\n".join(f"    \"{name}:{description}\"" for name, description in subcommands.items())
    option_lines = "\n".join(f"    \"--{name}:{description}\"" for name, description in OPTION_DESCRIPTIONS.items())
    return TEMPLATE.format(subcommands=subcommand_lines, options=option_lines)


def write_completions(home_dir: Path, subcommands: dict) -> Path:
    completion_file = home_dir / ".zsh" / "completions" / "_devconfigs"
    completion_file.parent.mkdir(parents=True, exist_ok=True)
    completion_file.write_text(render_completions(subcommands))
    logger.info(
        "✅ Zsh autocompletions set up successfully. Please restart your terminal or "
        "run 'source ~/.zshrc' to activate them.")
    return completion_file
