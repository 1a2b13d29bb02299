from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from .api_client import Upload
from .errors import ValidationError
from .log import get_logger

log = get_logger(__name__)

PDF_MIME = 'application/pdf'


def validate_resume(file: Optional[FileStorage]) -> Upload:
    """Accept only a readable PDF; returns the upload tuple with the stream rewound."""
    if file is None or not file.filename:
        raise ValidationError('Please upload your resume', {'resume': 'Please upload your resume'})
    fname = secure_filename(file.filename) or 'resume.pdf'
    if Path(fname).suffix.lower() != '.pdf' or (file.mimetype and file.mimetype != PDF_MIME):
        raise ValidationError('Please upload a PDF file', {'resume': 'Please upload a PDF file'})
    stream = file.stream
    try:
        pages = len(PdfReader(stream).pages)
    except Exception as e:
        log.info('Rejected unreadable PDF %s: %s', fname, e)
        raise ValidationError('The file could not be read as a PDF', {'resume': 'The file could not be read as a PDF'}) from e
    if pages == 0:
        raise ValidationError('The PDF has no pages', {'resume': 'The PDF has no pages'})
    stream.seek(0)
    return fname, stream, PDF_MIME
