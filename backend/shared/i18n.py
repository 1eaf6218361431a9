"""
Localization service.

The Translator is an immutable lookup built once at composition time and
handed to the layers that render user-facing text. Alternate tables can be
injected for tests or new locales.
"""

import re
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

DEFAULT_TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # User fields
        "firstName": "First Name",
        "lastName": "Last Name",
        "email": "Email",
        "phone": "Phone",
        "gender": "Gender",
        "dateOfBirth": "Date of Birth",
        "male": "male",
        "female": "female",
        # Post fields
        "text": "Text",
        "likes": "Likes",
        "tags": "Tags",
        "publishDate": "Publish Date",
        # Comment fields
        "message": "Message",
        # Error messages
        "userNotFound": "User not found",
        "postNotFound": "Post not found",
        "commentNotFound": "Comment not found",
        "invalidUserID": "Invalid user ID format",
        "invalidPostID": "Invalid post ID format",
        "invalidCommentID": "Invalid comment ID format",
        "invalidOwnerID": "Invalid owner ID format",
        "invalidPagination": "Invalid pagination: {{field}} must be a positive integer",
        "invalidDateFilter": "Invalid date filter: {{value}}",
        "invalidFilterValue": "Invalid filter value: {{value}}",
        "missingRequiredFields": "Missing required fields: {{fields}}",
        "invalidEmailFormat": "Invalid email format",
        "validationError": "Validation error: {{error}}",
        "emailExists": "Email already exists",
        "idempotencyKeyExists": "A record with this idempotency key already exists",
        "failedToFetchUsers": "Failed to fetch users",
        "failedToFetchUser": "Failed to fetch user",
        "failedToSearchUsers": "Failed to search users",
        "failedToCreateUser": "Failed to create user",
        "failedToUpdateUser": "Failed to update user",
        "failedToDeleteUser": "Failed to delete user",
        "failedToFetchPosts": "Failed to fetch posts",
        "failedToFetchPost": "Failed to fetch post",
        "failedToSearchPosts": "Failed to search posts",
        "failedToFetchPostsByTag": "Failed to fetch posts by tag",
        "failedToCreatePost": "Failed to create post",
        "failedToUpdatePost": "Failed to update post",
        "failedToDeletePost": "Failed to delete post",
        "failedToFetchComments": "Failed to fetch comments",
        "failedToFetchComment": "Failed to fetch comment",
        "failedToCreateComment": "Failed to create comment",
        "failedToUpdateComment": "Failed to update comment",
        "failedToDeleteComment": "Failed to delete comment",
        "failedToFetchTags": "Failed to fetch tags",
        "failedToFetchPostOwner": "Failed to fetch post owner",
        "failedToFetchCommentOwner": "Failed to fetch comment owner",
        "failedToFetchCommentPost": "Failed to fetch comment post",
        "loginFailed": "Login failed",
        "internalError": "Internal server error",
        "invalidOperation": "Invalid operation or path",
        # Pagination
        "currentPage": "Current Page",
        "totalRecords": "Total Records",
        "totalPages": "Total Pages",
        "hasNextPage": "Has Next Page",
        "hasPreviousPage": "Has Previous Page",
    },
    "fr": {
        # User fields
        "firstName": "Prénom",
        "lastName": "Nom",
        "email": "Courriel",
        "phone": "Téléphone",
        "gender": "Genre",
        "dateOfBirth": "Date de naissance",
        "male": "homme",
        "female": "femme",
        # Post fields
        "text": "Texte",
        "likes": "J'aimes",
        "tags": "Mots-clés",
        "publishDate": "Date de publication",
        # Comment fields
        "message": "Message",
        # Error messages
        "userNotFound": "Utilisateur non trouvé",
        "postNotFound": "Publication non trouvée",
        "commentNotFound": "Commentaire non trouvé",
        "invalidUserID": "Format d'ID utilisateur invalide",
        "invalidPostID": "Format d'ID de publication invalide",
        "invalidCommentID": "Format d'ID de commentaire invalide",
        "invalidOwnerID": "Format d'ID de propriétaire invalide",
        "invalidPagination": "Pagination invalide : {{field}} doit être un entier positif",
        "invalidDateFilter": "Filtre de date invalide : {{value}}",
        "invalidFilterValue": "Valeur de filtre invalide : {{value}}",
        "missingRequiredFields": "Champs obligatoires manquants: {{fields}}",
        "invalidEmailFormat": "Format de courriel invalide",
        "validationError": "Erreur de validation : {{error}}",
        "emailExists": "Ce courriel existe déjà",
        "idempotencyKeyExists": "Un enregistrement avec cette clé d'idempotence existe déjà",
        "failedToFetchUsers": "Échec de la récupération des utilisateurs",
        "failedToFetchUser": "Échec de la récupération de l'utilisateur",
        "failedToSearchUsers": "Échec de la recherche des utilisateurs",
        "failedToCreateUser": "Échec de la création de l'utilisateur",
        "failedToUpdateUser": "Échec de la mise à jour de l'utilisateur",
        "failedToDeleteUser": "Échec de la suppression de l'utilisateur",
        "failedToFetchPosts": "Échec de la récupération des publications",
        "failedToFetchPost": "Échec de la récupération de la publication",
        "failedToSearchPosts": "Échec de la recherche des publications",
        "failedToFetchPostsByTag": "Échec de la récupération des publications par mot-clé",
        "failedToCreatePost": "Échec de la création de la publication",
        "failedToUpdatePost": "Échec de la mise à jour de la publication",
        "failedToDeletePost": "Échec de la suppression de la publication",
        "failedToFetchComments": "Échec de la récupération des commentaires",
        "failedToFetchComment": "Échec de la récupération du commentaire",
        "failedToCreateComment": "Échec de la création du commentaire",
        "failedToUpdateComment": "Échec de la mise à jour du commentaire",
        "failedToDeleteComment": "Échec de la suppression du commentaire",
        "failedToFetchTags": "Échec de la récupération des mots-clés",
        "failedToFetchPostOwner": "Échec de la récupération de l'auteur de la publication",
        "failedToFetchCommentOwner": "Échec de la récupération de l'auteur du commentaire",
        "failedToFetchCommentPost": "Échec de la récupération de la publication du commentaire",
        "loginFailed": "Échec de la connexion",
        "internalError": "Erreur interne du serveur",
        "invalidOperation": "Opération ou chemin invalide",
        # Pagination
        "currentPage": "Page actuelle",
        "totalRecords": "nombreTotal",
        "totalPages": "Nombre total de pages",
        "hasNextPage": "Prochaine page?",
        "hasPreviousPage": "Page précédente?",
    },
}

DATE_FORMATS = {
    "en": "%m/%d/%Y",
    "fr": "%d/%m/%Y",
}

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Translator:
    """
    Read-only translation lookup.

    Lookup order for a key: requested locale, default locale, the key itself.
    """

    def __init__(
        self,
        translations: Optional[Mapping[str, Mapping[str, str]]] = None,
        default_locale: str = "en",
    ) -> None:
        source = translations if translations is not None else DEFAULT_TRANSLATIONS
        self._tables = MappingProxyType(
            {locale: MappingProxyType(dict(table)) for locale, table in source.items()}
        )
        self._default_locale = default_locale

    @property
    def default_locale(self) -> str:
        return self._default_locale

    @property
    def locales(self) -> frozenset[str]:
        return frozenset(self._tables)

    def has(self, key: str, locale: Optional[str] = None) -> bool:
        """Whether a translation exists for the key in the locale or the default."""
        for candidate in (locale, self._default_locale):
            if candidate and key in self._tables.get(candidate, {}):
                return True
        return False

    def t(self, key: str, locale: Optional[str] = None, **params: Any) -> str:
        """Translate a key and interpolate ``{{name}}`` placeholders."""
        text = key
        for candidate in (locale, self._default_locale):
            table = self._tables.get(candidate or "", {})
            if key in table:
                text = table[key]
                break
        if not params:
            return text
        return _PLACEHOLDER.sub(
            lambda match: str(params.get(match.group(1), match.group(0))),
            text,
        )

    def format_date(
        self,
        value: Optional[Union[date, datetime]],
        locale: Optional[str] = None,
    ) -> Optional[str]:
        """Render a date as MM/DD/YYYY (en) or DD/MM/YYYY (fr)."""
        if value is None:
            return None
        fmt = DATE_FORMATS.get(locale or "", DATE_FORMATS["en"])
        return value.strftime(fmt)
