import sys

def main():
    from app import NetworkFormApp
    NetworkFormApp().run()
    sys.exit(0)

if __name__ == "__main__":
    main()
