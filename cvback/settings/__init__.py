"""
Settings package for cvback project.

Pick a module through DJANGO_SETTINGS_MODULE:
cvback.settings.development, cvback.settings.testing or
cvback.settings.production.
"""
