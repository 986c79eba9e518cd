# backend/api/urls.py
from django.urls import path, re_path

from .views import EntryDeleteView, EntryListView, healthz
from .views_login import api_login
from .views_logout import api_logout
from .views_media import MediaView
from .views_whoami import whoami

app_name = "api"

# ⚠️ Pas de 'api/' ici : le préfixe 'api/' est ajouté au niveau du projet.
# Slash final optionnel (le front appelle /api/entries sans slash).
urlpatterns = [
    re_path(r"^entries/?$", EntryListView.as_view(), name="entries"),
    re_path(r"^delete/?$", EntryDeleteView.as_view(), name="entry-delete"),
    re_path(r"^media/?$", MediaView.as_view(), name="media"),

    # Auth (jeton de session X-Session-Token)
    re_path(r"^login/?$", api_login, name="login"),
    re_path(r"^logout/?$", api_logout, name="logout"),
    re_path(r"^whoami/?$", whoami, name="whoami"),

    # Endpoint santé (utile pour healthchecks / probes)
    path("healthz/", healthz, name="healthz"),
    path("healthz", healthz),
]
