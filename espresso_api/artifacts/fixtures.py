"""
Known deployment artifacts, standing in for a live bucket listing.
"""

from typing import Dict, List

# artifact id -> (files, created_at)
_FIXTURE = [
    ("1a3bfc85-0bf6-4ab0-99c0-43c37ec9efd5", "89263651", "99893605", "2023-01-17T00:13:03.708Z"),
    ("d784441e-4274-4b70-b775-f18bd87d9214", "88056111", "22731866", "2023-01-18T00:13:03.710Z"),
    ("7e8944a7-83e2-4566-8731-41bce9edda77", "1724968", "97780320", "2023-01-19T00:13:03.710Z"),
    ("7147ba30-c221-44df-94ab-0c83fe4a6391", "36471052", "77511315", "2023-01-20T00:13:03.710Z"),
    ("176f43e8-259e-4e9d-a55b-192bc5cae64f", "84176651", "7086849", "2023-01-21T00:13:03.710Z"),
    ("15b37099-f1a6-45ba-bbc1-cb9261dcaa75", "10270009", "59359724", "2023-01-22T00:13:03.710Z"),
    ("ae21fefe-0e71-47ab-9ad7-43f1182b451e", "57117165", "20214774", "2023-01-23T00:13:03.710Z"),
    ("57a20f2c-bbb2-44eb-8508-67143d9a0c18", "75906841", "46359545", "2023-01-24T00:13:03.710Z"),
    ("3f717260-8051-4da4-8e8d-2d8a390ac8bd", "74834240", "70394533", "2023-01-25T00:13:03.710Z"),
    ("c58a9a90-c5c0-4b59-8d57-03ee8729c825", "54348891", "50364086", "2023-01-26T00:13:03.710Z"),
    ("99c08202-ec34-482a-9a85-da470ede9a53", "93666719", "6202881", "2023-01-27T00:13:03.710Z"),
    ("8c474471-eb35-45ee-bbf1-b2368c320b5a", "60907524", "89312022", "2023-01-28T00:13:03.710Z"),
    ("a9502de5-4bfa-4375-be69-8099235a6a76", "35798873", "49077758", "2023-01-29T00:13:03.710Z"),
    ("733fcc9e-e68e-45e4-be23-863a250c151a", "49604849", "18635668", "2023-01-30T00:13:03.710Z"),
    ("9b9b2dcf-dcc1-4256-b083-9fcc1c7bc44b", "95263143", "38067611", "2023-01-31T00:13:03.710Z"),
    ("8ba65daa-84da-410e-b412-55998aec14a5", "38468193", "21435310", "2023-02-01T00:13:03.710Z"),
    ("c4276d03-1410-4c75-b886-4144cebfb5ae", "40254642", "29276563", "2023-02-02T00:13:03.710Z"),
    ("aa1dbc82-cf6e-4174-b9fe-bea136cc9ca7", "28116839", "98897325", "2023-02-03T00:13:03.710Z"),
    ("6f7d8f84-12a3-454d-bcce-0a77b81c68ef", "93800834", "65622981", "2023-02-04T00:13:03.710Z"),
    ("8a5173e5-fd39-4a35-a5a6-1288b59f2042", "45977129", "81443452", "2023-02-05T00:13:03.710Z"),
]

FIXTURE_FOLDERS: Dict[str, Dict[str, object]] = {
    artifact_id: {
        "files": ["manifest.json", f"index.{js_hash}.js", f"styles.{css_hash}.css"],
        "created_at": created_at,
    }
    for artifact_id, js_hash, css_hash, created_at in _FIXTURE
}

FIXTURE_ARTIFACT_IDS: List[str] = [artifact_id for artifact_id, *_ in _FIXTURE]
