"""End-to-end tests: load, sanitize, chunk and build vector records."""

import hashlib
import json
import pytest
import tempfile
from pathlib import Path
from rag_ingest.pipeline import IngestionPipeline
from rag_ingest.loader import DocumentLoader, DocumentLoadError, decode_document, load_documents
from rag_ingest.audit.logger import get_audit_logger


@pytest.fixture
def temp_dir():
    """Create temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def test_config_dict(temp_dir):
    """Create test configuration."""
    return {
        'chunking': {
            'strategy': 'small_to_big',
            'parent_size': 10,
            'child_size': 5,
            'parent_overlap': 0,
            'child_overlap': 0,
        },
        'audit_log': {
            'file': f'{temp_dir}/audit.log'
        },
        'document_dirs': [f'{temp_dir}/docs']
    }


def read_events(log_file):
    return [json.loads(line) for line in Path(log_file).read_text().splitlines() if line]


def test_prepare_document_small_to_big(test_config_dict):
    """Children are embedded, parents are stored as metadata text."""
    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_document("doc-1", "notes.md", "user-1", "1234567890abcdefghij")

    assert [r['id'] for r in records] == ["doc-1#0", "doc-1#1", "doc-1#2", "doc-1#3"]
    assert [r['text'] for r in records] == ["12345", "67890", "abcde", "fghij"]

    metadata = [r['metadata'] for r in records]
    assert [m['text'] for m in metadata] == ["1234567890"] * 2 + ["abcdefghij"] * 2
    assert [m['chunk_index'] for m in metadata] == [0, 1, 2, 3]
    assert all(m['total_chunks'] == 4 for m in metadata)
    assert all(m['owner_id'] == "user-1" and m['file_name'] == "notes.md" for m in metadata)
    assert metadata[0]['parent_id'] == metadata[1]['parent_id']
    assert metadata[1]['parent_id'] != metadata[2]['parent_id']


def test_prepare_document_flat(test_config_dict):
    """Flat chunks carry no parent id."""
    test_config_dict['chunking'] = {'strategy': 'flat', 'chunk_size': 10, 'overlap': 2}
    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_document("doc-2", "a.txt", "user-1", "1234567890abcdefghij")

    assert [r['text'] for r in records] == ["1234567890", "90abcdefgh", "ghij"]
    assert all('parent_id' not in r['metadata'] for r in records)
    assert [r['metadata']['text'] for r in records] == [r['text'] for r in records]


def test_prepare_document_skips_blank_children(test_config_dict):
    """Whitespace-only child windows are never sent for embedding."""
    test_config_dict['chunking'].update({'parent_size': 20, 'child_size': 5})
    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_document("d", "f.md", "u", "abcde" + "\n" * 10 + "fghij")

    assert [r['text'] for r in records] == ["abcde", "fghij"]
    assert [r['id'] for r in records] == ["d#0", "d#1"]
    assert [r['metadata']['chunk_index'] for r in records] == [0, 1]
    assert all(r['metadata']['total_chunks'] == 2 for r in records)


def test_metadata_text_cap_from_config(test_config_dict):
    test_config_dict['metadata'] = {'max_text_length': 5}
    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_document("d", "f.md", "u", "1234567890abcdefghij")

    assert [r['metadata']['text'] for r in records] == ["12345", "12345", "abcde", "abcde"]


def test_prepare_document_sanitizes(test_config_dict, temp_dir):
    """Broken surrogates never reach records; removal is audited."""
    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_document("doc-3", "a.txt", "u", "ab\ud800cd\x00e")

    assert records[0]['metadata']['text'] == "abcde"

    events = read_events(f'{temp_dir}/audit.log')
    sanitized = [e for e in events if e['event'] == 'text_sanitized']
    assert sanitized[0]['removed'] == 2


def test_empty_document_rejected(test_config_dict, temp_dir):
    """Text that sanitizes to nothing is an error and is audited."""
    pipeline = IngestionPipeline(test_config_dict)

    with pytest.raises(DocumentLoadError, match="Extracted text is empty"):
        pipeline.prepare_document("doc-4", "empty.txt", "u", "\x00\ud800  ")

    events = read_events(f'{temp_dir}/audit.log')
    assert events[-1]['event'] == 'error'
    assert events[-1]['document_id'] == "doc-4"


def test_audit_log_has_counts_not_text(test_config_dict, temp_dir):
    pipeline = IngestionPipeline(test_config_dict)
    pipeline.prepare_document("doc-5", "secret.md", "u", "confidential words here")

    content = Path(f'{temp_dir}/audit.log').read_text()
    assert 'confidential' not in content

    ingestion = [e for e in read_events(f'{temp_dir}/audit.log') if e['event'] == 'document_ingestion']
    assert ingestion[0]['num_chunks'] == 5
    assert ingestion[0]['num_parents'] == 3
    assert ingestion[0]['strategy'] == 'small_to_big'
    assert 'timestamp' in ingestion[0]


def test_audit_disabled(temp_dir):
    pipeline = IngestionPipeline({'chunking': {}, 'audit_log': {'enabled': False}})
    assert pipeline.audit is None
    assert pipeline.prepare_document("d", "f.md", "u", "hello")


def test_prepare_file(test_config_dict, temp_dir):
    """Files are loaded, hashed for an id and chunked."""
    md_file = Path(temp_dir) / 'test.md'
    md_file.write_text("# Section 1\n\nThis is test content.", encoding='utf-8')

    pipeline = IngestionPipeline(test_config_dict)
    records = pipeline.prepare_file(str(md_file), owner_id="user-1")

    expected_id = hashlib.sha256(md_file.read_bytes()).hexdigest()[:16]
    assert records[0]['id'] == f"{expected_id}#0"
    assert records[0]['metadata']['file_name'] == "test.md"
    assert records[0]["text"] == "# Sec"
    assert records[0]["metadata"]["text"] == "# Section "


def test_document_loader_markdown(temp_dir):
    """Markdown files decode to sanitized text with descriptive fields."""
    md_file = Path(temp_dir) / 'test.md'
    md_file.write_bytes("# Title\n\nbody\x07 text".encode('utf-8'))

    document = DocumentLoader().load(str(md_file))

    assert document['text'] == "# Title\n\nbody text"
    assert document['content_type'] == 'text/markdown'
    assert document['file_name'] == 'test.md'
    assert len(document['hash']) == 64  # SHA256


def test_document_loader_unsupported(temp_dir):
    pdf_file = Path(temp_dir) / 'test.pdf'
    pdf_file.write_bytes(b"%PDF-1.4")

    with pytest.raises(DocumentLoadError, match="Unsupported format"):
        DocumentLoader().load(str(pdf_file))


def test_document_loader_missing_file(temp_dir):
    with pytest.raises(DocumentLoadError, match="File not found"):
        DocumentLoader().load(f"{temp_dir}/missing.txt")


def test_decode_document_content_types():
    assert decode_document(b"hello", "text/plain") == "hello"
    assert decode_document(b"# hi", "text/x-markdown") == "# hi"

    with pytest.raises(DocumentLoadError, match="Unsupported content type: application/octet-stream"):
        decode_document(b"MZ", "application/octet-stream")

    with pytest.raises(DocumentLoadError, match="Empty document object"):
        decode_document(None, "text/plain")


def test_decode_document_invalid_utf8():
    """Undecodable bytes become replacement characters rather than failing."""
    assert decode_document(b"ok\xffok", "text/plain") == "ok\ufffdok"


def test_load_documents_from_config(test_config_dict, temp_dir):
    """The pipeline walks the configured document_dirs."""
    docs_dir = Path(temp_dir) / 'docs' / 'nested'
    docs_dir.mkdir(parents=True)
    (docs_dir / 'a.txt').write_text("alpha", encoding='utf-8')
    (docs_dir / 'b.md').write_text("beta", encoding='utf-8')
    (docs_dir / 'c.pdf').write_bytes(b"%PDF-1.4")

    documents = IngestionPipeline(test_config_dict).load_documents()

    assert sorted(d['text'] for d in documents) == ["alpha", "beta"]


def test_load_documents_missing_dir(temp_dir):
    assert load_documents([f'{temp_dir}/nowhere']) == []


def test_load_directory_upper_case_extension(temp_dir):
    """Extensions match case-insensitively when walking a directory."""
    (Path(temp_dir) / 'A.MD').write_text("upper", encoding='utf-8')
    (Path(temp_dir) / 'b.Txt').write_text("mixed", encoding='utf-8')
    (Path(temp_dir) / 'c.PDF').write_bytes(b"%PDF-1.4")

    documents = DocumentLoader().load_directory(temp_dir)

    assert [d['file_name'] for d in documents] == ['A.MD', 'b.Txt']
    assert [d['text'] for d in documents] == ["upper", "mixed"]


def test_audit_logging(temp_dir):
    """Test audit logging."""
    log_file = f'{temp_dir}/test.log'
    audit = get_audit_logger({'file': log_file, 'level': 'INFO'})

    audit.log_document_ingestion(
        document_id="doc-1",
        file_name="a.md",
        strategy="flat",
        num_chunks=3,
        num_parents=0,
    )

    events = read_events(log_file)
    assert events[0]['event'] == 'document_ingestion'
    assert events[0]['num_chunks'] == 3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
