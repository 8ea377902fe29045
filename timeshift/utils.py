import os


def get_data_dir(create: bool = True) -> str:
    """Get the timeshift data directory"""
    data_dir = os.getenv('TIMESHIFT_DATA_DIR')
    if not data_dir:
        data_dir = os.path.expanduser('~/.config/timeshift')

    if create:
        os.makedirs(data_dir, exist_ok=True)
    return data_dir
