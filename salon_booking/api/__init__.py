"""Capa HTTP (FastAPI): routers, schemas y traducción de errores de dominio."""
