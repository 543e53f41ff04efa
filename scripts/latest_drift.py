import json
import os
import sys

ART = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "_artifacts")


def latest_drift(art_dir: str = ART):
    if not os.path.isdir(art_dir):
        print("No artifacts directory:", art_dir)
        return
    files = sorted(
        os.path.join(art_dir, f)
        for f in os.listdir(art_dir)
        if f.startswith("drift_") and f.endswith(".json")
    )
    if not files:
        print("No drift manifests found")
        return
    path = files[-1]
    print("Latest manifest:", path)
    with open(path, encoding="utf-8") as fh:
        j = json.load(fh)
    print("Data root:", j.get("data_root"))
    print("Summary:", j.get("summary"))
    print("sha256:", j.get("sha256"))
    missing = [s["filename"] for s in j.get("series", []) if not s.get("found")]
    for name in missing:
        print("none", name)
    for p in j.get("orphans", []) or []:
        print("orphan", p)


if __name__ == "__main__":
    latest_drift(sys.argv[1] if len(sys.argv) > 1 else ART)
