"""Plugin managers under benchmark and their per-manager commands.

Every plugin manager ("kind") maps to exactly one prepare command, one
version command and one template bundle. The tables below must stay
exhaustive over ``Kind``; ``tests/test_kinds.py`` enforces it.
"""

from enum import Enum


class Kind(str, Enum):
    """A zsh plugin manager under benchmark.

    Declaration order is the order used when sweeping every kind.
    """

    ANTIBODY = "antibody"
    ANTIGEN = "antigen"
    SHELDON = "sheldon"
    ZGEN = "zgen"
    ZINIT = "zinit"
    ZPLUG = "zplug"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> "Kind":
        """Parse a user-supplied kind name.

        Matching is case-insensitive and treats ``-`` and ``_`` alike.

        Raises:
            ValueError: If the token names no known plugin manager.
        """
        normalized = token.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == normalized:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"'{token}' is not a valid kind. Options: {valid}")

    @classmethod
    def all(cls) -> list["Kind"]:
        """Every kind, in sweep order."""
        return list(cls)


# Shared by every kind's templates. Order matters for the manifests.
PLUGINS: tuple[str, ...] = (
    "zsh-users/zsh-autosuggestions",
    "wting/autojump",
    "zsh-users/zsh-syntax-highlighting",
    "StackExchange/blackbox",
    "sobolevn/git-secret",
    "b4b4r07/enhancd",
    "fcambus/ansiweather",
    "chriskempson/base16-shell",
    "supercrabtree/k",
    "zsh-users/zsh-history-substring-search",
    "wfxr/forgit",
    "zdharma/fast-syntax-highlighting",
    "iam4x/zsh-iterm-touchbar",
    "unixorn/git-extra-commands",
    "MichaelAquilina/zsh-you-should-use",
    "mfaerevaag/wd",
    "zsh-users/zaw",
    "Tarrasch/zsh-autoenv",
    "mafredri/zsh-async",
    "djui/alias-tips",
    "agkozak/zsh-z",
    "changyuheng/fz",
    "b4b4r07/emoji-cli",
    "Tarrasch/zsh-bd",
    "Vifon/deer",
    "zdharma/history-search-multi-word",
)

# Resets a manager's on-disk state so the next shell start reinstalls plugins.
_PREPARE_COMMANDS: dict[Kind, str] = {
    Kind.ANTIBODY: "rm -rf /root/.cache/antibody",
    Kind.ANTIGEN: "rm -rf /root/.antigen",
    Kind.SHELDON: (
        "find /root/.sheldon -mindepth 1 -maxdepth 1 "
        '! -name "plugins*.toml" -exec rm -rf {} \\;'
    ),
    Kind.ZGEN: "git -C /root/.zgen clean -dffx",
    Kind.ZINIT: (
        "find /root/.zinit -mindepth 1 -maxdepth 1 "
        '! -name "bin" -exec rm -rf {} \\;'
    ),
    Kind.ZPLUG: "rm -rf /root/.zplug/repos",
}

_VERSION_COMMANDS: dict[Kind, tuple[str, ...]] = {
    Kind.ANTIBODY: ("antibody", "--version"),
    Kind.ANTIGEN: ("zsh", "-c", "source /root/antigen.zsh && antigen-version"),
    Kind.SHELDON: ("sheldon", "--version"),
    Kind.ZGEN: ("git", "-C", "/root/.zgen", "rev-parse", "--short", "HEAD"),
    Kind.ZINIT: ("git", "-C", "/root/.zinit/bin", "rev-parse", "--short", "HEAD"),
    Kind.ZPLUG: ("git", "-C", "/root/.zplug", "rev-parse", "--short", "HEAD"),
}


def _lookup(table: dict, kind: Kind):
    if not isinstance(kind, Kind) or kind not in table:
        # Kinds only come from Kind.parse() or iteration; anything else is a bug.
        raise ValueError(f"Unknown plugin manager kind: {kind!r}")
    return table[kind]


def prepare_command(kind: Kind) -> str:
    """Shell command that resets ``kind`` to its pristine pre-install state."""
    return _lookup(_PREPARE_COMMANDS, kind)


def version_command(kind: Kind) -> list[str]:
    """Command whose standard output shows the installed version of ``kind``."""
    return list(_lookup(_VERSION_COMMANDS, kind))
