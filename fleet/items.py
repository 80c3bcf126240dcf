"""Maintenance item catalog: tracked items and their description keywords."""

from typing import Dict, Iterable, List, Optional, Sequence


class MaintenanceItem:
    """A tracked maintenance category matched against record descriptions."""

    def __init__(self, name: str, label: str, keywords: Sequence[str]):
        self.name = name
        self.label = label
        self.keywords = tuple(keywords)
        self._keywords_lower = tuple(k.lower() for k in self.keywords if k)

    def matches(self, description: str) -> bool:
        """True if any keyword is a case-insensitive substring of description."""
        text = (description or "").lower()
        return any(keyword in text for keyword in self._keywords_lower)

    def __repr__(self) -> str:
        return f"MaintenanceItem({self.name!r}, {self.label!r})"


class Catalog:
    """Ordered collection of maintenance items."""

    def __init__(self, items: Iterable[MaintenanceItem]):
        self.items: List[MaintenanceItem] = list(items)
        self._by_name: Dict[str, MaintenanceItem] = {i.name: i for i in self.items}
        self._by_label: Dict[str, MaintenanceItem] = {i.label: i for i in self.items}

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def names(self) -> List[str]:
        return [item.name for item in self.items]

    def get(self, name: str) -> Optional[MaintenanceItem]:
        """Find an item by its identifier name."""
        return self._by_name.get(name)

    def resolve_name(self, text: str) -> str:
        """
        Map a display label to its identifier name.

        Identifier names and unknown text are returned unchanged.
        """
        text = (text or "").strip()
        if text in self._by_name:
            return text
        item = self._by_label.get(text)
        return item.name if item else text

    @classmethod
    def from_dict(cls, data: Sequence[dict]) -> "Catalog":
        """Build a catalog from config entries: [{name, label, keywords}, ...]."""
        return cls(
            MaintenanceItem(d["name"], d.get("label") or d["name"], d.get("keywords") or [])
            for d in data
        )


DEFAULT_CATALOG = Catalog(
    [
        MaintenanceItem("oil change", "ТО (масло+фільтри)", ["масл", "мастил"]),
        MaintenanceItem("timing belt", "ГРМ (ролики+ремінь)", ["грм", "ремінь грм", "комплект грм"]),
        MaintenanceItem("drive belt", "Обвідний ремінь+ролики", ["обвідний", "поліклиновий", "приводний ремінь"]),
        MaintenanceItem("water pump", "Помпа", ["помпа", "водяний насос"]),
        MaintenanceItem("clutch", "Зчеплення", ["зчеплення", "вижимний"]),
        MaintenanceItem("starter", "Стартер", ["стартер"]),
        MaintenanceItem("alternator", "Генератор", ["генератор"]),
        MaintenanceItem("chassis diagnostics", "Діагностика ходової", ["діагностика ходової", "діагностика підвіски"]),
        MaintenanceItem("wheel alignment", "Розвал-сходження", ["розвал", "сходження"]),
        MaintenanceItem("caliper service", "Профілактика супортів", ["супорт"]),
        MaintenanceItem("computer diagnostics", "Комп'ютерна діагностика", ["комп'ютерна діагностика", "компютерна діагностика"]),
        MaintenanceItem("dpf burn", "Прожиг сажового", ["прожиг", "сажов"]),
        MaintenanceItem("brake pads", "Гальмівні колодки", ["колодк"]),
        MaintenanceItem("brake discs", "Гальмівні диски", ["гальмівний диск", "гальмівні диски", "диск гальмівний", "диски гальмівні"]),
        MaintenanceItem("shock absorbers", "Амортизатори", ["амортизатор"]),
        MaintenanceItem("strut mounts", "Опора амортизаторів", ["опора амортизатор"]),
        MaintenanceItem("ball joint", "Шарова опора", ["шарова", "кульова опора"]),
        MaintenanceItem("tie rod", "Рульова тяга", ["рульова тяга", "рульової тяги"]),
        MaintenanceItem("tie rod end", "Рульовий накінечник", ["накінечник"]),
        MaintenanceItem("battery", "Акумулятор", ["акумулятор", "акб"]),
        MaintenanceItem("air filter", "Повітряний фільтр", ["повітряний фільтр", "фільтр повітряний"]),
        MaintenanceItem("spark plugs", "Свічки запалювання", ["свічк"]),
    ]
)
