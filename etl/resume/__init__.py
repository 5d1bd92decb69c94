#!/usr/bin/env python3
"""
Resume Extraction Module - document bytes to a validated resume graph.

Handles:
- Text extraction and sanitization for PDF / Word uploads
- Prompt construction for the generative model
- Tolerant parsing and validation of model responses
- Heuristic fallback extraction

The model-backed service lives in etl.resume.extraction.
"""
from etl.resume.exceptions import (
    ResumeProcessingError,
    ExtractionError,
    ConfigurationError,
    ModelCallError,
    ParseFailure,
)
from etl.resume.models import (
    ExtractionMode,
    ParsedBulletPoint,
    ParsedJob,
    ParsedResume,
    RejectedRecord,
    ResumeParseResult,
    LegacyBullet,
)
from etl.resume.text_extractor import DocumentTextExtractor, sanitize_extracted_text

__all__ = [
    'ResumeProcessingError',
    'ExtractionError',
    'ConfigurationError',
    'ModelCallError',
    'ParseFailure',
    'ExtractionMode',
    'ParsedBulletPoint',
    'ParsedJob',
    'ParsedResume',
    'RejectedRecord',
    'ResumeParseResult',
    'LegacyBullet',
    'DocumentTextExtractor',
    'sanitize_extracted_text',
]
