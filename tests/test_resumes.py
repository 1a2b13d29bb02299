import io

import pytest
from PyPDF2 import PdfWriter
from werkzeug.datastructures import FileStorage

from job_portal.errors import ValidationError
from job_portal.resumes import validate_resume


def _pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def test_valid_pdf_is_rewound_for_upload():
    f = FileStorage(stream=io.BytesIO(_pdf_bytes()), filename='My CV.pdf', content_type='application/pdf')
    name, stream, mime = validate_resume(f)
    assert name == 'My_CV.pdf'
    assert mime == 'application/pdf'
    assert stream.read(4) == b'%PDF'


def test_missing_file_is_rejected():
    with pytest.raises(ValidationError):
        validate_resume(None)
    with pytest.raises(ValidationError):
        validate_resume(FileStorage(stream=io.BytesIO(b''), filename=''))


def test_non_pdf_extension_is_rejected():
    f = FileStorage(stream=io.BytesIO(b'hello'), filename='cv.docx')
    with pytest.raises(ValidationError) as exc:
        validate_resume(f)
    assert exc.value.fields == {'resume': 'Please upload a PDF file'}


def test_unreadable_pdf_is_rejected():
    f = FileStorage(stream=io.BytesIO(b'not a pdf'), filename='cv.pdf', content_type='application/pdf')
    with pytest.raises(ValidationError, match='could not be read'):
        validate_resume(f)
