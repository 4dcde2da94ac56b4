"""User-facing copy builders for errors, warnings and hints."""

from __future__ import annotations


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_warning(
    message: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable warning message."""
    lines = [_ensure_sentence(message)]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_kubeconfig_error(kubeconfig: str | None, why: str) -> str:
    """Error copy for a kubeconfig that cannot be loaded."""
    target = f"kubeconfig '{kubeconfig}'" if kubeconfig else "the default kubeconfig"
    return build_actionable_error(
        f"load {target}",
        why=why,
        next_step="check the file or pass a different one with --kubeconfig",
    )


def build_secret_fetch_error(name: str, namespace: str, why: str) -> str:
    """Error copy for a direct-print fetch that failed."""
    return build_actionable_error(
        f"get secret '{name}' in namespace '{namespace}'",
        why=why,
        next_step="check the secret name or pick another namespace with -n",
    )


__all__ = [
    "build_actionable_error",
    "build_actionable_warning",
    "build_kubeconfig_error",
    "build_next_step_hint",
    "build_secret_fetch_error",
]
