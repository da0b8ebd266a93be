#!filepath: src/azkar_app/utils/__init__.py
