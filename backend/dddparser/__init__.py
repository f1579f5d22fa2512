# DDD Parser Modul
# Formaterkennung und Dispatch für Fahrerkarten- und VU-Downloads

from .models import *
from .errors import DDDParserError, PayloadError, PayloadErrorKind, DecoderError
from .service import ParserService, get_parser_service
