"""Database models"""
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock, SectionType
from careersite.models.job import Job

__all__ = [
    "Company",
    "ContentBlock",
    "SectionType",
    "Job",
]
