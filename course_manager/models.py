"""Course record types."""

from dataclasses import dataclass, replace


@dataclass
class Course:
    """One course entry as stored in the backing file."""

    id: str
    title: str = ""
    price: object = None

    @classmethod
    def from_dict(cls, data):
        """
        Build a Course from a decoded JSON object.
        Unknown keys are ignored; missing title/price fall back to defaults.
        """
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            price=data.get("price"),
        )

    def to_dict(self):
        return {"id": self.id, "title": self.title, "price": self.price}


@dataclass
class CourseUpdate:
    """
    Partial change to a Course.
    A member left as None is unspecified and keeps the existing value.
    """

    title: object = None
    price: object = None

    def apply(self, course):
        """Return a copy of course with every specified member overwritten."""
        changes = {}
        if self.title is not None:
            changes["title"] = self.title
        if self.price is not None:
            changes["price"] = self.price
        return replace(course, **changes)
