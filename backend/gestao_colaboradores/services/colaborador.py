# ruff: noqa: TC003
from __future__ import annotations

import threading
import uuid
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any, Protocol, runtime_checkable

from gestao_colaboradores.schemas.base import CamelModel

MUTABLE_FIELDS = frozenset({"nome", "cargo", "departamento", "email", "telefone", "data_admissao", "ativo"})


class Colaborador(CamelModel):
    """An employee record as held by the store."""

    id: str
    nome: str
    cargo: str
    departamento: str
    email: str
    telefone: str | None = None
    data_admissao: date | None = None
    ativo: bool = True
    data_criacao: datetime
    data_atualizacao: datetime


SEED_COLABORADORES: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "nome": "João Silva",
        "cargo": "Desenvolvedor Backend",
        "departamento": "Tecnologia",
        "email": "joao.silva@empresa.com",
        "telefone": "(11) 99999-9999",
        "data_admissao": date(2023, 1, 15),
    },
    {
        "id": "2",
        "nome": "Maria Santos",
        "cargo": "Desenvolvedor Frontend",
        "departamento": "Tecnologia",
        "email": "maria.santos@empresa.com",
        "telefone": "(11) 88888-8888",
        "data_admissao": date(2023, 3, 20),
    },
)


def _now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


@runtime_checkable
class ColaboradorStore(Protocol):
    """Interface for the employee record store."""

    def list_all(self) -> list[Colaborador]:
        """Return every record in insertion order."""
        ...

    def find_by_id(self, colaborador_id: str) -> Colaborador | None:
        """Return the record or None if not found."""
        ...

    def create(self, fields: Mapping[str, Any]) -> Colaborador:
        """Store a new record built from already-validated fields."""
        ...

    def update(self, colaborador_id: str, fields: Mapping[str, Any]) -> Colaborador | None:
        """Merge fields onto an existing record. Returns None if not found."""
        ...

    def delete(self, colaborador_id: str) -> bool:
        """Remove a record. Returns False if not found."""
        ...

    def find_by_department(self, departamento: str) -> list[Colaborador]:
        """Return records whose department matches, ignoring case."""
        ...

    def reset(self) -> None:
        """Restore the seed fixtures."""
        ...


class InMemoryColaboradorStore:
    """Process-local store backed by a list.

    Lookups are linear scans. Every public method holds the lock for its
    whole duration, so the store can be shared between worker threads.
    Callers always receive copies of the stored records.
    """

    def __init__(self, seed: bool = True) -> None:
        self._lock = threading.Lock()
        self._seed = seed
        self._colaboradores: list[Colaborador] = self._fixtures() if seed else []

    @staticmethod
    def _fixtures() -> list[Colaborador]:
        now = _now()
        return [Colaborador(**fixture, data_criacao=now, data_atualizacao=now) for fixture in SEED_COLABORADORES]

    def _index_of(self, colaborador_id: str) -> int | None:
        for index, colaborador in enumerate(self._colaboradores):
            if colaborador.id == colaborador_id:
                return index
        return None

    def list_all(self) -> list[Colaborador]:
        with self._lock:
            return [c.model_copy() for c in self._colaboradores]

    def find_by_id(self, colaborador_id: str) -> Colaborador | None:
        with self._lock:
            index = self._index_of(colaborador_id)
            if index is None:
                return None
            return self._colaboradores[index].model_copy()

    def create(self, fields: Mapping[str, Any]) -> Colaborador:
        now = _now()
        data = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
        data.update(id=_new_id(), ativo=True, data_criacao=now, data_atualizacao=now)
        colaborador = Colaborador(**data)
        with self._lock:
            # uuid4 collisions are not expected, but ids must stay unique
            while self._index_of(colaborador.id) is not None:
                colaborador.id = _new_id()
            self._colaboradores.append(colaborador)
        return colaborador.model_copy()

    def update(self, colaborador_id: str, fields: Mapping[str, Any]) -> Colaborador | None:
        changes = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
        with self._lock:
            index = self._index_of(colaborador_id)
            if index is None:
                return None
            changes["data_atualizacao"] = _now()
            updated = self._colaboradores[index].model_copy(update=changes)
            self._colaboradores[index] = updated
            return updated.model_copy()

    def delete(self, colaborador_id: str) -> bool:
        with self._lock:
            index = self._index_of(colaborador_id)
            if index is None:
                return False
            del self._colaboradores[index]
            return True

    def find_by_department(self, departamento: str) -> list[Colaborador]:
        wanted = departamento.casefold()
        with self._lock:
            return [c.model_copy() for c in self._colaboradores if c.departamento.casefold() == wanted]

    def reset(self) -> None:
        with self._lock:
            self._colaboradores = self._fixtures() if self._seed else []
