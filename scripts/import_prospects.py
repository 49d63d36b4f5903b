import argparse
import json

import pandas as pd

# spreadsheet column -> key in pharmacies_raw.json
COLUMNS = {
    "CIP": "cip",
    "INTITULE_CLIENT": "INTITULE_CLIENT",
    "MATRICE": "MATRICE",
    "GROUPEMENT": "GROUPEMENT",
    "ADRESSE": "adresse",
    "CP": "cp",
    "VILLE": "VILLE",
    "PAYS": "PAYS",
}


def import_prospects(source="data/prospects.xlsx", destination="data/pharmacies_raw.json"):
    # First sheet only; every cell read as text so CIP / CP keep their leading zeros
    df = pd.read_excel(source, sheet_name=0, dtype=str).fillna("")

    print(f"Columns found: {list(df.columns)}")

    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {source}: {missing}")

    records = df[list(COLUMNS)].rename(columns=COLUMNS).to_dict(orient="records")

    with open(destination, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

    print(f"Wrote {len(records)} rows to '{destination}'.")
    return records


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Convert the prospects spreadsheet to pharmacies_raw.json")
    parser.add_argument("--source", default="data/prospects.xlsx")
    parser.add_argument("--destination", default="data/pharmacies_raw.json")
    args = parser.parse_args()
    import_prospects(args.source, args.destination)
