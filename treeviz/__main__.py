from treeviz.main import main

main()
