import csv
from pathlib import Path
from typing import List, Optional, Tuple


class Loader:
    def __init__(self, path: str):
        self.path = Path(path)
        self.headers: list[str] = []
        self.rows: list[list[str]] = []
        self._load()

    def _load(self):
        with self.path.open("r", newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            self.headers = next(reader, [])
            if not self.headers:
                raise ValueError(f"empty csv: {self.path}")
            for row in reader:
                if row and any(cell.strip() for cell in row):
                    self.rows.append(row)

    @property
    def feature_count(self) -> int:
        return len(self.headers) - 1 if len(self.headers) > 1 else len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def samples(self, n_features: Optional[int] = None) -> Tuple[List[List[float]], List[float]]:
        """Converte as linhas em (x, y); a última coluna é o alvo.

        Linhas curtas ou com células não numéricas são ignoradas.
        """
        n = self.feature_count if n_features is None else n_features
        if n < 1:
            raise ValueError("at least one feature")
        x: List[List[float]] = []
        y: List[float] = []
        for r in self.rows:
            if len(r) < n + 1:
                continue
            *features, target = r
            try:
                values = [float(v) for v in features[:n]]
                expected = float(target)
            except ValueError:
                continue
            x.append(values)
            y.append(expected)
        return x, y

    def __repr__(self) -> str:
        return f"Loader(features={self.feature_count}, rows={self.row_count})"
