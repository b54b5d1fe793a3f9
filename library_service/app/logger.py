import logging


class LoggerService:
    """
    Sumidero de diagnóstico que usan los handlers y los repositorios.

    Envuelve el logger "app". logging nunca propaga errores de sus handlers
    (los reporta con Handler.handleError), así que registrar un mensaje no
    puede hacer fallar la operación que lo llama.
    """

    def __init__(self, name: str = "app"):
        self._logger = logging.getLogger(name)

    def log_info(self, message: str) -> None:
        self._logger.info(message)

    def log_warn(self, message: str) -> None:
        self._logger.warning(message)

    def log_error(self, message: str) -> None:
        self._logger.error(message)
