"""Shell integration: aliases and tab completion.

Everything note adds to a shell lives in one generated file per shell
(``~/.note_bash_rc``, ``~/.note_zsh_rc``, ``~/.note_fish_rc``) which the
shell's rc file sources. Fish completion lives in fish's own completions
folder.
"""

import logging
import os
import shutil
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_SHELLS = ("bash", "zsh", "fish")

CENTRALIZED_CONFIG = {
    "bash": ".note_bash_rc",
    "zsh": ".note_zsh_rc",
    "fish": ".note_fish_rc",
}

HEADER = (
    "# Note CLI Shell Integration\n"
    "# Generated by note CLI - Do not edit manually\n"
    "# Regenerate with: note --autocomplete or note --alias\n\n"
)
ALIASES_MARKER = "# ============= ALIASES ============="
COMPLETION_MARKER = "# ============= COMPLETION ============="
SOURCE_MARKER = "# Note CLI integration"

ALIASES = ("n", "nls", "nrm")
FLAGS = "-l -s -a -d -h --help --version --config --autocomplete --alias"

# Note names without the .md suffix, read from the notesdir in ~/.note
NOTE_NAMES_FUNCTION = """_note_names() {
    local notesdir=$(grep "^notesdir=" ~/.note | cut -d= -f2 | sed "s|~|$HOME|")
    [[ -d "$notesdir" ]] && find "$notesdir" -maxdepth 1 -name "*.md" -type f -exec basename {} .md \\; 2>/dev/null | sort
}

"""

BASH_COMPLETION = f"""_note_complete() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local prev="${{COMP_WORDS[COMP_CWORD-1]}}"

    if [[ "$cur" == -* ]]; then
        COMPREPLY=($(compgen -W "{FLAGS}" -- "$cur"))
        return
    fi

    if [[ ${{COMP_CWORD}} -eq 1 || "$prev" == -*l || "$prev" == -*a || "$prev" == -*d ]]; then
        if [[ -f ~/.note ]]; then
            local notes=$(_note_names)
            local cur_lower=$(echo "$cur" | tr '[:upper:]' '[:lower:]')
            COMPREPLY=()
            for note in $notes; do
                local note_lower=$(echo "$note" | tr '[:upper:]' '[:lower:]')
                if [[ "$note_lower" == "$cur_lower"* ]]; then
                    COMPREPLY+=("$note")
                fi
            done
        fi
    fi
}}
"""

ZSH_COMPLETION = f"""autoload -U +X compinit && compinit

_note_complete() {{
    local cur="${{words[CURRENT]}}"
    local prev="${{words[CURRENT-1]}}"

    if [[ "$cur" == -* ]]; then
        local flags=({FLAGS})
        compadd -a flags
        return
    fi

    if [[ $CURRENT -eq 2 || "$prev" == -*l || "$prev" == -*a || "$prev" == -*d ]]; then
        if [[ -f ~/.note ]]; then
            local all_notes=(${{(f)"$(_note_names)"}})
            local notes=()
            local cur_lower="${{cur:l}}"
            for note in $all_notes; do
                if [[ "${{note:l}}" == ${{cur_lower}}* ]]; then
                    notes+=("$note")
                fi
            done
            compadd -a notes
        fi
    fi
}}
"""

_FISH_NOTE_NAMES = (
    "(if test -f ~/.note; set notesdir (grep \"^notesdir=\" ~/.note | cut -d= -f2 "
    '| sed "s|~|$HOME|"); if test -d "$notesdir"; find "$notesdir" -maxdepth 1 '
    '-name "*.md" -type f -exec basename {} .md \\; 2>/dev/null | sort; end; end)'
)


class ShellIntegrationError(Exception):
    """Raised when shell integration cannot be installed."""

    pass


def detect_shell() -> str | None:
    """Name of the user's login shell from ``$SHELL``, or None if unset."""
    shell = os.environ.get("SHELL", "")
    if not shell:
        return None
    return Path(shell).name


def find_note_executable() -> str:
    """Absolute path of the running ``note`` command, for use in aliases."""
    argv0 = Path(sys.argv[0])
    if argv0.name in ("note", "note.exe") and argv0.exists():
        return str(argv0.resolve())
    found = shutil.which("note")
    if found:
        return found
    raise ShellIntegrationError("Could not determine the note command path")


def _alias_lines(shell: str, note_path: str) -> str:
    sep = " " if shell == "fish" else "="
    targets = (note_path, f"{note_path} -l", f"{note_path} -d")
    lines = [f"alias {name}{sep}'{target}'" for name, target in zip(ALIASES, targets)]
    return "\n".join(lines) + "\n"


def generate_config(
    shell: str, aliases: bool, completion: bool, note_path: str
) -> str:
    """Content of the centralized integration file for ``shell``."""
    if shell not in SUPPORTED_SHELLS:
        raise ShellIntegrationError(f"Unsupported shell: {shell}")

    content = [HEADER]
    if aliases:
        content.append(f"{ALIASES_MARKER}\n")
        content.append(_alias_lines(shell, note_path))
        content.append("\n")

    # Fish completion is a separate file in its completions folder
    if completion and shell != "fish":
        body = BASH_COMPLETION if shell == "bash" else ZSH_COMPLETION
        register = "complete -F" if shell == "bash" else "compdef"
        content.append(f"{COMPLETION_MARKER}\n")
        content.append(NOTE_NAMES_FUNCTION)
        content.append(body)
        content.append("\n# Register completion for note and its aliases\n")
        for name in ("note", *ALIASES):
            content.append(f"{register} _note_complete {name}\n")

    return "".join(content)


def generate_fish_completion() -> str:
    """Fish completion definitions for ``note`` and its aliases."""
    lines = ["# note command completion for fish"]
    for command in ("note", "n"):
        lines += [
            f"complete -c {command} -f",
            f'complete -c {command} -s l -d "List notes"',
            f'complete -c {command} -s s -d "Search notes" -r',
            f'complete -c {command} -s a -d "Include archived notes"',
            f'complete -c {command} -s d -d "Archive notes" -r',
            f'complete -c {command} -s h -l help -d "Show help"',
            f'complete -c {command} -l version -d "Show version"',
            f'complete -c {command} -l config -d "Run setup/reconfigure"',
            f'complete -c {command} -l autocomplete -d "Setup command line autocompletion"',
            f'complete -c {command} -l alias -d "Setup shell aliases"',
            f"complete -c {command} -n '__fish_is_first_token' -a '{_FISH_NOTE_NAMES}'",
        ]
    for command in ("nls", "nrm"):
        lines += [
            f"complete -c {command} -f",
            f"complete -c {command} -n '__fish_is_first_token' -a '{_FISH_NOTE_NAMES}'",
        ]
    return "\n".join(lines) + "\n"


def _fish_completion_path(home: Path) -> Path:
    return home / ".config" / "fish" / "completions" / "note.fish"


def rc_path(shell: str, home: Path) -> Path:
    """The rc file that sources the centralized integration file."""
    if shell == "bash":
        return home / ".bashrc"
    if shell == "zsh":
        return home / ".zshrc"
    if shell == "fish":
        return home / ".config" / "fish" / "config.fish"
    raise ShellIntegrationError(f"Unsupported shell: {shell}")


def get_status(shell: str, home: Path | None = None) -> tuple[bool, bool]:
    """Return ``(has_aliases, has_completion)`` for the current install."""
    home = home or Path.home()
    if shell not in SUPPORTED_SHELLS:
        return False, False

    has_aliases = has_completion = False
    if shell == "fish":
        has_completion = _fish_completion_path(home).exists()

    config_path = home / CENTRALIZED_CONFIG[shell]
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError:
        return has_aliases, has_completion

    has_aliases = ALIASES_MARKER in content
    if shell != "fish":
        has_completion = COMPLETION_MARKER in content
    return has_aliases, has_completion


def write_config(
    shell: str,
    aliases: bool,
    completion: bool,
    home: Path | None = None,
    note_path: str | None = None,
) -> Path:
    """Write the centralized integration file (and fish completion)."""
    home = home or Path.home()
    note_path = note_path or find_note_executable()
    content = generate_config(shell, aliases, completion, note_path)
    config_path = home / CENTRALIZED_CONFIG[shell]

    try:
        config_path.write_text(content, encoding="utf-8")
        if shell == "fish" and completion:
            fish_path = _fish_completion_path(home)
            fish_path.parent.mkdir(parents=True, exist_ok=True)
            fish_path.write_text(generate_fish_completion(), encoding="utf-8")
    except OSError as e:
        raise ShellIntegrationError(f"Error writing {config_path}: {e}") from e

    logger.debug(f"Wrote shell integration to {config_path}")
    return config_path


def ensure_source_line(shell: str, home: Path | None = None) -> bool:
    """Append a line sourcing the integration file to the rc file.

    Returns:
        True if the line was added, False if it was already present.
    """
    home = home or Path.home()
    path = rc_path(shell, home)
    config_name = CENTRALIZED_CONFIG[shell]

    try:
        existing = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = ""
    except OSError as e:
        raise ShellIntegrationError(f"Error reading {path}: {e}") from e

    if config_name in existing or SOURCE_MARKER in existing:
        return False

    if shell == "fish":
        line = f"\n{SOURCE_MARKER}\ntest -f ~/{config_name}; and source ~/{config_name}\n"
    else:
        line = f"\n{SOURCE_MARKER}\n[ -f ~/{config_name} ] && source ~/{config_name}\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line)
    except OSError as e:
        raise ShellIntegrationError(f"Error writing to {path}: {e}") from e
    return True


def _is_legacy_alias(line: str) -> bool:
    stripped = line.strip()
    return "note" in stripped and any(
        stripped.startswith(f"alias {name}=") or stripped.startswith(f"alias {name} ")
        for name in ALIASES
    )


def clean_legacy_lines(content: str) -> str:
    """Drop inline aliases and completion hooks written by older releases."""
    kept = []
    in_section = False
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped in ("# note command aliases", "# note command completion"):
            in_section = True
            continue
        if ".note.bash" in line or ".note.zsh" in line or _is_legacy_alias(line):
            continue
        if in_section:
            if "source" in line and "note" in line:
                continue
            if "autoload" in line and "compinit" in line:
                continue
            if not stripped:
                continue
            if not stripped.startswith("#"):
                in_section = False
        kept.append(line)

    while kept and not kept[-1].strip():
        kept.pop()
    return "\n".join(kept) + "\n" if kept else ""


def cleanup_legacy(shell: str, home: Path | None = None) -> None:
    """Best-effort removal of older per-shell completion files and rc entries."""
    home = home or Path.home()
    legacy_files = {
        "bash": [home / ".note.bash"],
        "zsh": [home / ".note.zsh"],
        "fish": [],
    }
    rc_files = {
        "bash": [home / ".bashrc", home / ".bash_profile", home / ".profile"],
        "zsh": [home / ".zshrc"],
        "fish": [home / ".config" / "fish" / "config.fish"],
    }

    for path in legacy_files.get(shell, []):
        path.unlink(missing_ok=True)

    for path in rc_files.get(shell, []):
        try:
            content = path.read_text(encoding="utf-8")
            cleaned = clean_legacy_lines(content)
            if cleaned != content:
                path.write_text(cleaned, encoding="utf-8")
        except OSError as e:
            logger.debug(f"Skipping cleanup of {path}: {e}")


def install(
    shell: str,
    aliases: bool | None = None,
    completion: bool | None = None,
    home: Path | None = None,
    note_path: str | None = None,
) -> Path:
    """Enable aliases and/or completion, keeping whichever is already on.

    ``None`` for a feature keeps its current state.
    """
    if shell not in SUPPORTED_SHELLS:
        raise ShellIntegrationError(
            f"Shell '{shell}' not supported. Supported shells: {', '.join(SUPPORTED_SHELLS)}"
        )
    home = home or Path.home()
    has_aliases, has_completion = get_status(shell, home)
    cleanup_legacy(shell, home)
    path = write_config(
        shell,
        has_aliases if aliases is None else aliases,
        has_completion if completion is None else completion,
        home,
        note_path,
    )
    ensure_source_line(shell, home)
    return path
