from sqlalchemy import String, TypeDecorator


class EnumValueType(TypeDecorator):
    """Store a str-based enum by its value instead of its member name"""
    impl = String
    cache_ok = True
    
    def __init__(self, enum_class, length: int = 20):
        super().__init__(length)
        self.enum_class = enum_class
    
    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, self.enum_class):
            return value.value  # Use enum value, not name
        # Raises ValueError for values outside the enum
        return self.enum_class(str(value).lower()).value
    
    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.enum_class(str(value).lower())
