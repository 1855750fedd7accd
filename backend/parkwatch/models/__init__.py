from parkwatch.models.key_value import KeyValue

__all__ = ["KeyValue"]
