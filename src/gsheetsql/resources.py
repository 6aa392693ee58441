from dataclasses import asdict, fields, is_dataclass

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses mirror a JSON resource of the Sheets API and this gives them
    the translation back to the raw dict the client library wants.
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the client.  Nested resources can override.
        fixup() is called first so all fields are in correct format.
        """
        self.fixup()
        return asdict(self)

    def trim(self) -> dict:
        """
        Return the dict representation without top level attributes that are
        None or an empty string/container.  Numbers and bools are always kept
        since 0 and False are real values.  For request bodies that only want
        filled-in fields.
        """
        b = self.to_base()
        return {k: v for k, v in b.items()
                if not (v is None or (type(v) not in [int, bool, float] and not v))}

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass

    @classmethod
    def from_base(cls, data: dict|None):
        """
        Build from a response dict, ignoring any keys the dataclass does not
        declare.  The API adds fields over time and we don't want a new one to
        break construction.
        """
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} is not a dataclass")
        names = {f.name for f in fields(cls) if f.init}
        return cls(**{k: v for k, v in dict(data or {}).items() if k in names})
