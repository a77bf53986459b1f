import os, shutil


PROJECT_ROOT_MARKER = "requirements.txt"


def get_project_root(start_directory: str = None) -> str:
    """
    Walks up from the working directory (or start_directory) to the folder holding requirements.txt.

    Raises:
        FileNotFoundError: If no parent directory holds the marker file.
    """
    directory = os.path.abspath(start_directory or os.getcwd())

    while not os.path.exists(os.path.join(directory, PROJECT_ROOT_MARKER)):
        parent = os.path.dirname(directory)
        if parent == directory:
            raise FileNotFoundError(
                f"No '{PROJECT_ROOT_MARKER}' found in '{start_directory or os.getcwd()}' or its parents"
            )
        directory = parent

    return directory


def get_output_folder(relative_path: str) -> str:
    """
    Resolves an output path of the configuration against the project root and creates it.

    Args:
        relative_path (str): Path relative to the project root (e.g. FIGS_SAVE_PATH).

    Returns:
        str: The absolute path of the folder.
    """
    folder = os.path.join(get_project_root(), relative_path)
    os.makedirs(folder, exist_ok=True)
    return folder


def clean_folder(folder_path: str):
    """Empties the folder, creating it if needed."""
    shutil.rmtree(folder_path, ignore_errors=True)
    os.makedirs(folder_path, exist_ok=True)
