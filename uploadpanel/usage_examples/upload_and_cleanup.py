# upload_and_cleanup.py
"""
Esercita l'API contro un server in esecuzione e poi pulisce tutto.
- Login come admin (token JWT)
- Carica N file di prova in una cartella
- Verifica folderList / fileList
- Elimina i file caricati (piu' un nome inesistente e uno non valido)

Esecuzione:
    python upload_and_cleanup.py --username admin --password secret
Opzioni:
    --base-url (default http://127.0.0.1:8000)
    --folder   (default usage_example)
    --count    (numero di file da caricare)
"""

import argparse
import io
from pprint import pformat
import requests

def pretty(x): return pformat(x, width=110)

def api(base_url, method, path, *, token=None, params=None, json_body=None, files=None, data=None, ok_codes=(200,)):
    url = base_url + path
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    r = requests.request(method, url, params=params, json=json_body, files=files, data=data, headers=headers)
    if r.status_code not in ok_codes:
        raise RuntimeError(f"{method} {path} -> {r.status_code} : {r.text}")
    body = r.json()
    return body.get("data", body)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default="http://127.0.0.1:8000")
    ap.add_argument("--username", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--folder", default="usage_example")
    ap.add_argument("--count", type=int, default=3)
    args = ap.parse_args()
    base_url = args.base_url.rstrip("/")

    print("\n== PING ==")
    api(base_url, "GET", "/ping")
    print("API OK.")

    print("\n== LOGIN ==")
    token = api(base_url, "POST", "/api/auth/login",
                json_body={"username": args.username, "password": args.password})["token"]
    me = api(base_url, "GET", "/api/auth/me", token=token)
    print(f"✓ Logged in as {me['sub']} (role={me['role']})")

    # ------------------ UPLOAD ------------------
    saved = []
    for i in range(args.count):
        content = f"usage example file #{i}\n".encode("utf-8")
        res = api(base_url, "POST", "/api/upload/run", token=token,
                  files={"file": (f"Sample_{i}.TXT", io.BytesIO(content), "text/plain")},
                  data={"folderName": args.folder})
        saved.append(res["saved_as"])
        print(f"✓ Uploaded {res['original_name']} -> {res['saved_as']} ({res['size']} bytes)")

    # ------------------ LISTE ------------------
    folders = api(base_url, "GET", "/api/upload/folderList", token=token)["folders"]
    assert args.folder in folders, f"folder {args.folder} missing: {folders}"
    print(f"✓ Folders: {folders}")

    files = api(base_url, "GET", "/api/upload/fileList", token=token, params={"folderName": args.folder})["files"]
    names = {f["name"] for f in files}
    assert set(saved) <= names, f"uploaded files missing from listing: {pretty(files)}"
    print(f"✓ Files in {args.folder}:\n{pretty(files)}")

    # ------------------ CLEANUP ------------------
    res = api(base_url, "POST", "/api/upload/deleteFiles", token=token,
              json_body={"folderName": args.folder, "files": saved + ["missing.txt", "../escape"]})
    print(f"✓ Deleted: {res['deleted']}")
    print(f"  Errors:  {pretty(res['errors'])}")

    left = api(base_url, "GET", "/api/upload/fileList", token=token, params={"folderName": args.folder})["files"]
    assert not set(saved) & {f["name"] for f in left}, "some uploaded files were not deleted"
    print("\nDone.")

if __name__ == "__main__":
    main()
