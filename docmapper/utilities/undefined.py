class Undefined:
    """ Marker for "argument not passed", where None is itself a meaningful value.

    Model.__call__ uses it so that model(record) (new) differs from model(record, None) (existing), and
    FieldDeclaration uses it so that a field may declare None as its default.
    Falsy, and there is only ever one instance.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNDEFINED"

    def __bool__(self):
        return False

UNDEFINED = Undefined()
