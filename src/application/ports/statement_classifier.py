"""
Port: Statement Classifier Interface
Defines contract for turning statement rows into transaction candidates
"""

from abc import ABC, abstractmethod

from domain.entities.statement import ImportCandidate, StatementColumns, StatementRow


class IStatementClassifier(ABC):
    """Interface for statement row classification"""

    @abstractmethod
    def classify(
        self,
        rows: list[StatementRow],
        columns: StatementColumns
    ) -> list[ImportCandidate]:
        """
        Classify the rows below the header into income/expense candidates

        Args:
            rows: All rows of the sheet, header included
            columns: Column indices resolved from the header row

        Returns:
            Candidates for valid rows; invalid rows are dropped, not raised
        """
        pass
