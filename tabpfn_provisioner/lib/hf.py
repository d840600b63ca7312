from __future__ import annotations

import logging

from huggingface_hub import login

logger = logging.getLogger(__name__)


def login_with_token(token: str) -> None:
    """Log into the Hugging Face Hub non-interactively.

    The token is stored in the Hub's own credential store only; it is never
    added to the git credential helper.
    """
    login(token=token, add_to_git_credential=False)
