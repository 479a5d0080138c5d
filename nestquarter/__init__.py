"""NestQuarter booking lifecycle service."""
