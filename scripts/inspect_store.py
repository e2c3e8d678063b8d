import sqlite3, os, json
from sqlalchemy.engine import make_url
from core.config import DATABASE_URL, STORAGE_KEY


def db_path(url=DATABASE_URL):
    # Only sqlite URLs point at a local file
    return make_url(url).database


def main():
    db = db_path()
    print('DB:', db, 'exists:', os.path.exists(db))
    con = sqlite3.connect(db)
    cur = con.cursor()
    cur.execute("SELECT key, length(value), updated_at FROM kv_store")
    for r in cur.fetchall():
        print(r)
    cur.execute("SELECT value FROM kv_store WHERE key = ?", (STORAGE_KEY,))
    row = cur.fetchone()
    patients = json.loads(row[0]) if row else []
    print('patients:', len(patients))
    for p in patients[:10]:
        print(p.get('id'), p.get('name'), 'visits:', len(p.get('visitHistory', [])), 'next:', p.get('followUpConfig', {}).get('nextFollowUpDate'))
    con.close()


if __name__ == "__main__":
    main()
