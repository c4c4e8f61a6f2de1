"""msicode -- MSI (Modified Plessey) barcode encoder/decoder.

Encodes digit strings as MSI bar/space patterns and decodes them back
from single binarized scanlines, with optional modulo-10 check digit
validation, matrix/SVG/PNG rendering and a small HTTP service.
"""
