# /app.py

from ingredient_decoder import app, db
from ingredient_decoder.models import ScanRecord, UserFlag
from ingredient_decoder.analysis.matcher import analyze_product
from ingredient_decoder.barcodes.validation import validate_barcode

@app.shell_context_processor
def make_shell_context():
    """Create a shell context for the application -
    for working with the Ingredient Decoder database and analyzer in the Flask shell"""
    return {
        'db': db,
        'ScanRecord': ScanRecord,
        'UserFlag': UserFlag,
        'analyze_product': analyze_product,
        'validate_barcode': validate_barcode,
    }
