"""Tests for manifest module.

Test Files and Coverage:
========================

| Test File          | Test Classes                          | Tested Constructs                    | Tested Functionalities                   |
|--------------------|---------------------------------------|--------------------------------------|------------------------------------------|
| test_record.py     | ParseLineTest, ParseAttributesTest    | parse_line(), parse_attributes()     | Splitting, leniency, malformed lines     |
| test_reader.py     | IterRecordsTest, ReadManifestTest     | iter_records(), read_manifest()      | Comments, line numbers, strict mode, I/O |
| test_settings.py   | AuditSettingsTest                     | AuditSettings                        | TOML loading, dot keys, environment      |
"""
