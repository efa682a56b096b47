from gox.main import main

main()
