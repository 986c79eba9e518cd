from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from api.hashers import SHA256PasswordHasher


class Command(BaseCommand):
    help = "Crée ou met à jour un compte du journal (mot de passe ou empreinte SHA-256 héritée)"

    def add_arguments(self, parser):
        parser.add_argument("username")
        secret = parser.add_mutually_exclusive_group(required=True)
        secret.add_argument("--password", help="mot de passe en clair (haché en PBKDF2)")
        secret.add_argument("--sha256", help="empreinte SHA-256 hex de l'ancienne table users")

    def handle(self, *args, **opts):
        U = get_user_model()
        user, created = U.objects.get_or_create(username=opts["username"])
        if opts["sha256"]:
            try:
                user.password = SHA256PasswordHasher.from_hex(opts["sha256"])
            except ValueError as e:
                raise CommandError(str(e))
        else:
            user.set_password(opts["password"])
        user.save()
        self.stdout.write(("[OK] Créé    " if created else "[=] Mis à jour ") + user.get_username())
