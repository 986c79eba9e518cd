from django.core.management.base import BaseCommand

from api.sessions import purge_expired


class Command(BaseCommand):
    help = "Supprime les sessions expirées (les lectures les expirent déjà au fil de l'eau)"

    def handle(self, *args, **opts):
        deleted = purge_expired()
        self.stdout.write(f"Terminé. {deleted} session(s) expirée(s) supprimée(s).")
