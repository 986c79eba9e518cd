# backend/api/hashers.py
import hashlib

from django.contrib.auth.hashers import BasePasswordHasher, mask_hash
from django.utils.crypto import constant_time_compare
from django.utils.translation import gettext_noop as _


def sha256_hex(password):
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class SHA256PasswordHasher(BasePasswordHasher):
    """
    Empreinte SHA-256 hex non salée, format "sha256$$<hex>".

    Sert uniquement à vérifier les comptes importés de l'ancienne table users;
    check_password() les migre vers le hasher par défaut dès la connexion.
    """

    algorithm = "sha256"

    def salt(self):
        return ""

    def encode(self, password, salt):
        if salt != "":
            raise ValueError("salt must be empty.")
        return f"{self.algorithm}$${sha256_hex(password)}"

    def decode(self, encoded):
        algorithm, empty, hash = encoded.split("$", 2)
        assert algorithm == self.algorithm
        return {"algorithm": algorithm, "hash": hash, "salt": None}

    def verify(self, password, encoded):
        return constant_time_compare(encoded, self.encode(password, ""))

    def safe_summary(self, encoded):
        decoded = self.decode(encoded)
        return {
            _("algorithm"): decoded["algorithm"],
            _("hash"): mask_hash(decoded["hash"]),
        }

    def harden_runtime(self, password, encoded):
        pass

    @classmethod
    def from_hex(cls, digest):
        """Encode une empreinte déjà calculée (import de comptes)."""
        digest = digest.strip().lower()
        if len(digest) != 64 or any(c not in "0123456789abcdef" for c in digest):
            raise ValueError("expected a 64-character hex SHA-256 digest")
        return f"{cls.algorithm}$${digest}"
