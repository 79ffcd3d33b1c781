# game/errors.py
"""
Ошибки игровой логики.

Все наследуются от ValueError, чтобы обработчики, ловящие ValueError
для нарушений игровых правил, продолжали работать. Каждая ошибка несёт
сообщение для игрока и HTTP-статус для API-слоя.
"""


class GameError(ValueError):
    status_code = 400
    default_message = "Операция не может быть выполнена"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


# ===== КОНФИГУРАЦИЯ КАТАЛОГА (не повторять, чинить данные) =====

class PackConfigurationError(GameError):
    status_code = 422
    default_message = "Этот набор сейчас нельзя открыть"


class EmptyPackError(PackConfigurationError):
    default_message = "Набор пуст: в нём нет ни одной карточки"


class MisconfiguredPackError(PackConfigurationError):
    default_message = "Набор настроен неверно: суммарный шанс выпадения равен нулю"


# ===== НЕ НАЙДЕНО =====

class NotFoundError(GameError):
    status_code = 404
    default_message = "Не найдено"


class PackNotFoundError(NotFoundError):
    default_message = "Набор не найден"


class CardNotOwnedError(NotFoundError):
    default_message = "У вас нет этой карточки"


class PlayerNotFoundError(NotFoundError):
    default_message = "Игрок не найден"


# ===== ХРАНИЛИЩЕ (можно повторить весь запрос) =====

class EconomyCommitError(GameError):
    status_code = 503
    default_message = "Не удалось сохранить изменения, попробуйте ещё раз"
