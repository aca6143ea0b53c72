"""
RecipeBook Backend — Application Package Initializer
====================================================

What: Marks the `recipebook` directory as a Python package.
Who:  Imported by uvicorn (`recipebook.main:app`), pytest, and every module below.

Architecture Note:
    The backend is a thin gateway over two managed collaborators:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (users, favorites,       │  ← Field checks, status mapping
    │   recipes)                          │
    ├─────────────────────────────────────┤
    │   Collaborator interfaces           │  ← IdentityProvider, DocumentStore
    ├─────────────────────────────────────┤
    │   Firebase Auth  │  Cloud Firestore │  ← Managed, external
    └─────────────────────────────────────┘

    No state is held between requests; everything lives in the collaborators.
"""

__version__ = "1.0.0"
