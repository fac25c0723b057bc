from abc import ABC, abstractmethod
from collections.abc import Iterable

from bizbooks.domain.documents import Company, DocumentRecord, Scope
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.exceptions import ScopeMismatchError


class DocumentSource(ABC):
    """Read side of the record repository, as consumed by list controllers."""

    @abstractmethod
    async def fetch(self, kind: DocumentKind, scope: Scope) -> list[DocumentRecord]:
        """Return the scope's records of ``kind``, newest first.

        The scope filter is applied by the backing store. Ties on creation
        time are broken by id so repeated calls return the same order.

        Raises:
            ScopeMismatchError: ``scope`` uses the wrong rule for ``kind``.
            FetchFailedError: the backing store could not answer.
        """

    @staticmethod
    def check_scope(kind: DocumentKind, scope: Scope) -> None:
        if scope.rule is not kind.scope_rule:
            raise ScopeMismatchError(
                kind.value, kind.scope_rule.value, scope.rule.value
            )


class DocumentRepository(DocumentSource):
    @abstractmethod
    def add(self, record: DocumentRecord) -> None:
        pass

    @abstractmethod
    def get(self, kind: DocumentKind, record_id: str) -> DocumentRecord | None:
        pass

    @abstractmethod
    def count(self, kind: DocumentKind) -> int:
        pass


class CompanyRepository(ABC):
    @abstractmethod
    def add(self, company: Company) -> None:
        pass

    @abstractmethod
    def get(self, company_id: str) -> Company | None:
        pass

    @abstractmethod
    def list_all(self) -> Iterable[Company]:
        pass
