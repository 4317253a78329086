from .cleaner import RecordCleaner, clean_spelling
from .struct_parser import StructDumpParser, parse_struct_dump

__all__ = ['RecordCleaner', 'clean_spelling', 'StructDumpParser', 'parse_struct_dump']
