from rates_workbench.config import AppConfig
from rates_workbench.indices import descriptors_frame, inspect_indices


def main():
    cfg = AppConfig()
    cfg.apply_global_settings()

    descriptors = inspect_indices()

    # Conventions are read but not shown unless asked for.
    if cfg.print_index_table:
        print(descriptors_frame(descriptors).to_string(index=False))

    return descriptors


if __name__ == "__main__":
    main()
