# backend/api/sessions.py
import logging
import secrets

from django.conf import settings
from django.utils import timezone

from .models import SessionToken

logger = logging.getLogger(__name__)


def new_token():
    # 32 octets aléatoires -> 64 caractères hex
    return secrets.token_hex(32)


def open_session(user):
    """Crée une session à durée fixe (pas de prolongation glissante)."""
    return SessionToken.objects.create(
        token=new_token(),
        user=user,
        username=user.get_username(),
        expires_at=timezone.now() + settings.DIARY_SESSION_TTL,
    )


def resolve_session(token):
    """
    Retourne la SessionToken valide pour ce jeton, sinon None.

    Expiration paresseuse : une session expirée est supprimée au moment où on
    la consulte, il n'y a pas de tâche de fond.
    """
    if not token:
        return None
    session = SessionToken.objects.select_related("user").filter(token=token).first()
    if session is None:
        return None
    if session.is_expired():
        SessionToken.objects.filter(token=token).delete()
        logger.info("Expired session removed for %s", session.username)
        return None
    if not session.user.is_active:
        return None
    return session


def close_session(token):
    """Supprime la session si elle existe. Idempotent."""
    if not token:
        return False
    deleted, _ = SessionToken.objects.filter(token=token).delete()
    return deleted > 0


def purge_expired(now=None):
    deleted, _ = SessionToken.objects.filter(expires_at__lt=now or timezone.now()).delete()
    return deleted
