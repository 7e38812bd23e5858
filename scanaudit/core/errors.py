"""Ошибки менеджера проверок."""


class CheckManagerError(Exception):
    """Базовая ошибка менеджера проверок"""
    pass


class InvalidPlatforms(CheckManagerError):
    """Проверка нацелена на неизвестные платформы"""
    pass


class CheckNotFound(CheckManagerError, KeyError):
    """Проверка с таким именем не загружена"""

    def __str__(self) -> str:
        # KeyError.__str__ оборачивает сообщение в кавычки
        return str(self.args[0]) if self.args else ""
