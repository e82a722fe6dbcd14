class ResourceNotFoundError(Exception):
    """Запрошенная запись отсутствует в хранилище."""


class DuplicateResourceError(Exception):
    """Email уже занят другим пользователем."""
