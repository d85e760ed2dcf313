# ui/avaluos_ui/queries.py
"""
Capa de consultas del tablero: caché por clave, invalidación y suscripciones.

Cada combinación de filtros es una clave (tupla). Los resultados se guardan por
clave y se consideran frescos durante `refetch_interval` segundos o hasta que
alguien llame a `invalidate`. Solo `invalidate` avisa a los suscriptores; las
recargas periódicas no. Cada petición lleva un número de generación: si una
respuesta llega después de otra más nueva para la misma clave, se descarta.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from avaluos_ui.errors import QueryError

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]


@dataclass
class QueryResult:
    data: Any = None
    error: Optional[Exception] = None
    updated_at: Optional[float] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class _Entry:
    data: Any = None
    error: Optional[Exception] = None
    updated_at: Optional[float] = None
    checked_at: Optional[float] = None
    generation: int = 0
    stale: bool = True


def _matches(prefix: QueryKey, key: QueryKey) -> bool:
    return tuple(key[: len(prefix)]) == tuple(prefix)


class QueryClient:
    def __init__(self, refetch_interval: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.refetch_interval = refetch_interval
        self._clock = clock
        self._entries: Dict[QueryKey, _Entry] = {}
        self._subscribers: List[Tuple[QueryKey, Callable[[QueryKey], None]]] = []

    # ---------- generaciones ----------

    def start(self, key: QueryKey) -> int:
        """Registra una petición nueva para `key` y devuelve su generación."""
        entry = self._entries.setdefault(tuple(key), _Entry())
        entry.generation += 1
        return entry.generation

    def settle(self, key: QueryKey, generation: int, data: Any = None, error: Optional[Exception] = None) -> bool:
        """
        Guarda el resultado de la petición `generation`.
        Devuelve False (y no toca la caché) si ya hay una petición más nueva.
        """
        key = tuple(key)
        entry = self._entries.get(key)
        if entry is None or generation != entry.generation:
            logger.debug(f"[QUERY] Respuesta obsoleta descartada para {key} (gen {generation})")
            return False

        now = self._clock()
        entry.checked_at = now
        entry.stale = False
        if error is not None:
            # Se conservan los datos anteriores
            entry.error = error
        else:
            entry.data = data
            entry.error = None
            entry.updated_at = now
        return True

    # ---------- lectura ----------

    def is_fresh(self, key: QueryKey) -> bool:
        entry = self._entries.get(tuple(key))
        if entry is None or entry.stale or entry.checked_at is None:
            return False
        return self._clock() - entry.checked_at < self.refetch_interval

    def get_cached(self, key: QueryKey) -> Optional[QueryResult]:
        entry = self._entries.get(tuple(key))
        if entry is None:
            return None
        return QueryResult(data=entry.data, error=entry.error, updated_at=entry.updated_at)

    def fetch(self, key: QueryKey, fn: Callable[[], Any]) -> Any:
        """Ejecuta `fn` siempre. Si falla lanza QueryError y la caché conserva lo anterior."""
        key = tuple(key)
        generation = self.start(key)
        try:
            data = fn()
        except QueryError as e:
            logger.error(f"[QUERY] Error en {key}: {e}")
            self.settle(key, generation, error=e)
            raise
        except Exception as e:
            logger.error(f"[QUERY] Error en {key}: {e}")
            error = QueryError(str(e))
            self.settle(key, generation, error=error)
            raise error from e

        if not self.settle(key, generation, data=data):
            return self._entries[key].data
        return data

    def get(self, key: QueryKey, fn: Callable[[], Any]) -> QueryResult:
        """Devuelve la caché si está fresca; si no, vuelve a consultar."""
        key = tuple(key)
        if not self.is_fresh(key):
            try:
                self.fetch(key, fn)
            except QueryError:
                pass
        return self.get_cached(key)

    # ---------- invalidación ----------

    def invalidate(self, key: QueryKey = ()) -> int:
        """Marca como obsoletas todas las entradas cuya clave empieza por `key`."""
        prefix = tuple(key)
        count = 0
        for entry_key, entry in self._entries.items():
            if _matches(prefix, entry_key):
                entry.stale = True
                count += 1
                self._notify(entry_key)
        return count

    def subscribe(self, key: QueryKey, callback: Callable[[QueryKey], None]) -> Callable[[], None]:
        item = (tuple(key), callback)
        self._subscribers.append(item)

        def unsubscribe():
            if item in self._subscribers:
                self._subscribers.remove(item)

        return unsubscribe

    def _notify(self, key: QueryKey) -> None:
        for prefix, callback in list(self._subscribers):
            if _matches(prefix, key):
                callback(key)
