# src/taskflow/i18n.py

"""User-facing strings. French is the product's primary language."""

from __future__ import annotations

MESSAGES: dict[str, dict[str, str]] = {
    "fr": {
        "login_success": "Connexion réussie",
        "signup_success": "Inscription réussie. Vérifiez votre email pour confirmer.",
        "passwords_mismatch": "Les mots de passe ne correspondent pas",
        "missing_credentials": "Email et mot de passe requis",
        "generic_error": "Une erreur est survenue",
        "signing_in": "Connexion en cours...",
        "signing_up": "Inscription en cours...",
        "logged_out": "Déconnecté",
        "login_required": "Connectez-vous d'abord (/login).",
        # navigation
        "nav_dashboard": "Tableau de bord",
        "nav_tasks": "Tâches",
        "nav_projects": "Projets",
        "nav_reports": "Rapports IA",
        "nav_settings": "Paramètres",
        # dashboard
        "total_tasks": "Tâches totales",
        "in_progress": "En cours",
        "overdue": "En retard",
        "active_members": "Membres actifs",
        "members_of": "Sur {total} membres",
        "projects_in_progress": "Projets en cours",
        "recent_activity": "Activité récente",
        "no_tasks": "Aucune tâche.",
        "no_projects": "Aucun projet.",
        # demo activity
        "demo_task_assigned": "Nouvelle tâche assignée",
        "demo_task_assigned_detail": "Intégration des tests E2E",
        "demo_task_assigned_time": "Il y a 5 minutes",
        "demo_project_updated": "Projet mis à jour",
        "demo_project_updated_detail": "Refonte UI - Sprint 2 terminé",
        "demo_project_updated_time": "Il y a 2 heures",
        "demo_comment_added": "Commentaire ajouté",
        "demo_comment_added_detail": "Sur la tâche #123",
        "demo_comment_added_time": "Il y a 4 heures",
    },
    "en": {
        "login_success": "Signed in",
        "signup_success": "Registration successful. Check your email to confirm.",
        "passwords_mismatch": "Passwords do not match",
        "missing_credentials": "Email and password are required",
        "generic_error": "An error occurred",
        "signing_in": "Signing in...",
        "signing_up": "Signing up...",
        "logged_out": "Signed out",
        "login_required": "Sign in first (/login).",
        "nav_dashboard": "Dashboard",
        "nav_tasks": "Tasks",
        "nav_projects": "Projects",
        "nav_reports": "AI reports",
        "nav_settings": "Settings",
        "total_tasks": "Total tasks",
        "in_progress": "In progress",
        "overdue": "Overdue",
        "active_members": "Active members",
        "members_of": "Out of {total} members",
        "projects_in_progress": "Projects in progress",
        "recent_activity": "Recent activity",
        "no_tasks": "No tasks.",
        "no_projects": "No projects.",
        "demo_task_assigned": "New task assigned",
        "demo_task_assigned_detail": "E2E test integration",
        "demo_task_assigned_time": "5 minutes ago",
        "demo_project_updated": "Project updated",
        "demo_project_updated_detail": "UI redesign - Sprint 2 done",
        "demo_project_updated_time": "2 hours ago",
        "demo_comment_added": "Comment added",
        "demo_comment_added_detail": "On task #123",
        "demo_comment_added_time": "4 hours ago",
    },
}


def t(key: str, lang: str = "fr", **kwargs: object) -> str:
    """Look up `key` for `lang`, falling back to French, then to the key itself."""
    catalog = MESSAGES.get(lang) or MESSAGES["fr"]
    text = catalog.get(key) or MESSAGES["fr"].get(key) or key
    return text.format(**kwargs) if kwargs else text
