import os
import sys
import time
import datetime

PREFIX = "Backup_log"
SEPARATOR = "---------------------------------------------------------------------------------------------"
EXTENSION = "log"
RETENTION_DAYS = 14


class log:
    # Se sobreescribe desde run.py con --logDir
    directory = "Logs-pterodactyl/"

    @staticmethod
    def filename(day=None):
        day = day or datetime.datetime.now()
        return f"{PREFIX}{day.strftime('%Y_%m_%d')}.{EXTENSION}"

    @classmethod
    def logs(cls, messages):
        """Añade el mensaje al log del día; si no se puede escribir avisa por stderr y sigue."""
        backup_file = os.path.join(cls.directory, cls.filename())
        try:
            os.makedirs(cls.directory, exist_ok=True)
            with open(backup_file, "a", encoding="utf-8") as f:
                f.write(str(messages))
                f.write("\n\n")
                f.write(SEPARATOR)
                f.write("\n\n")
            cls.rotate()
        except OSError as e:
            print(f"No se pudo escribir el log en {cls.directory}: {e}", file=sys.stderr)
            return None
        return backup_file

    @classmethod
    def rotate(cls):
        """Borra los logs más antiguos que RETENTION_DAYS."""
        cutoff = time.time() - (RETENTION_DAYS * 86400)
        for fname in os.listdir(cls.directory):
            fpath = os.path.join(cls.directory, fname)
            if not fname.startswith(PREFIX):
                continue
            try:
                if os.path.isfile(fpath) and os.path.getmtime(fpath) < cutoff:
                    os.remove(fpath)
            except OSError:
                continue
